"""Tests for rule kinds: decoding, encoding, argument parsing and command results."""

import logging
import math
from enum import Enum

import pytest

from gamerules.commands import TextArgumentReader
from gamerules.errors import CommandSyntaxError, InvalidValueError
from gamerules.kinds import (
    BOOLEAN,
    DOUBLE,
    FLOAT,
    INT,
    INT_MAX,
    INT_MIN,
    STRING,
    RuleKind,
    enum_kind,
    kind_for_label,
    narrow,
    string_hash,
)
from gamerules.models import ArgumentType


class Difficulty(Enum):
    PEACEFUL = 0
    EASY = 1
    HARD = 2


class Empty(Enum):
    pass


def _arg(kind, token):
    return kind.parse_argument(TextArgumentReader({"value": token}), "value")


GARBAGE = ["", " ", "\t\n", "garbage", "12abc", "nan", "-inf", "1e999", "true false", "\x00"]
ALL_KINDS = [BOOLEAN, INT, FLOAT, DOUBLE, STRING, enum_kind(Difficulty)]


class TestBoolean:
    def test_decode(self):
        assert BOOLEAN.decode("true") is True
        assert BOOLEAN.decode("false") is False
        assert BOOLEAN.decode("TRUE") is True

    def test_decode_malformed_logs_and_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gamerules.kinds"):
            assert BOOLEAN.decode("yes") is False
        assert "Failed to parse boolean" in caplog.text

    def test_encode(self):
        assert BOOLEAN.encode(True) == "true"
        assert BOOLEAN.encode(False) == "false"

    def test_command_result(self):
        assert BOOLEAN.command_result(True) == 1
        assert BOOLEAN.command_result(False) == 0

    def test_coerce_rejects_non_bool(self):
        with pytest.raises(InvalidValueError):
            BOOLEAN.coerce(1)
        with pytest.raises(InvalidValueError):
            BOOLEAN.coerce("true")

    def test_argument(self):
        assert _arg(BOOLEAN, "true") is True
        with pytest.raises(CommandSyntaxError):
            _arg(BOOLEAN, "maybe")


class TestInt:
    def test_decode(self):
        assert INT.decode("42") == 42
        assert INT.decode("-7") == -7
        assert INT.decode("+3") == 3
        assert INT.decode(" 5 ") == 5

    def test_decode_malformed(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gamerules.kinds"):
            assert INT.decode("4.5") == 0
            assert INT.decode("1_000") == 0
        assert "Failed to parse int" in caplog.text

    def test_command_result_is_value(self):
        assert INT.command_result(-1) == -1
        assert INT.command_result(65536) == 65536

    def test_coerce_rejects_bool_and_float(self):
        with pytest.raises(InvalidValueError):
            INT.coerce(True)
        with pytest.raises(InvalidValueError):
            INT.coerce(1.0)
        assert INT.coerce(-1) == -1

    def test_argument_syntax_error(self):
        assert _arg(INT, "12") == 12
        with pytest.raises(CommandSyntaxError):
            _arg(INT, "twelve")

    def test_bounded_to_32_bits(self):
        assert INT.coerce(INT_MAX) == INT_MAX
        assert INT.coerce(INT_MIN) == INT_MIN
        with pytest.raises(InvalidValueError):
            INT.coerce(INT_MAX + 1)
        with pytest.raises(InvalidValueError):
            INT.coerce(10**5000)

    def test_out_of_range_text_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gamerules.kinds"):
            assert INT.decode("2147483648") == 0
            assert INT.decode("9" * 5000) == 0
        assert "Failed to parse int" in caplog.text


class TestDouble:
    def test_decode(self):
        assert DOUBLE.decode("1.5") == 1.5
        assert DOUBLE.decode("-2") == -2.0
        assert DOUBLE.decode("1e39") == 1e39

    @pytest.mark.parametrize("text", ["NaN", "inf", "-Infinity", "abc"])
    def test_decode_non_finite_falls_back(self, text):
        assert DOUBLE.decode(text) == 0.0

    def test_encode_round_trip(self):
        for value in [0.0, 0.1, -2.5, 1e100, 123456789.123]:
            assert DOUBLE.decode(DOUBLE.encode(value)) == value

    def test_command_result_is_sign(self):
        assert DOUBLE.command_result(2.5) == 1
        assert DOUBLE.command_result(-0.1) == -1
        assert DOUBLE.command_result(0.0) == 0

    def test_coerce(self):
        assert DOUBLE.coerce(3) == 3.0
        with pytest.raises(InvalidValueError):
            DOUBLE.coerce(math.inf)
        with pytest.raises(InvalidValueError):
            DOUBLE.coerce(math.nan)
        with pytest.raises(InvalidValueError):
            DOUBLE.coerce("1.0")

    def test_non_finite_argument_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gamerules.kinds"):
            assert _arg(DOUBLE, "inf") == 0.0
        assert "Rejected double argument" in caplog.text


class TestFloat:
    def test_values_are_single_precision(self):
        assert FLOAT.decode("0.1") == narrow(0.1)
        assert FLOAT.decode("0.1") != 0.1

    def test_encode_is_shortest(self):
        assert FLOAT.encode(narrow(0.1)) == "0.1"
        assert FLOAT.encode(3.0) == "3.0"
        assert FLOAT.encode(1.5) == "1.5"

    def test_round_trip(self):
        for value in [0.0, 0.1, -2.75, 1e10, 3.4e38, 1.17549435e-38]:
            narrowed = FLOAT.coerce(value)
            assert FLOAT.decode(FLOAT.encode(narrowed)) == narrowed

    def test_overflow_is_malformed(self):
        assert FLOAT.decode("1e39") == 0.0
        with pytest.raises(InvalidValueError):
            FLOAT.coerce(1e39)

    def test_coerce_rejects_infinity(self):
        with pytest.raises(InvalidValueError):
            FLOAT.coerce(math.inf)

    def test_narrow_overflow_keeps_sign(self):
        assert narrow(-1e300) == -math.inf


class TestString:
    def test_identity(self):
        assert STRING.decode("hello world") == "hello world"
        assert STRING.encode("") == ""

    def test_hash_matches_java(self):
        assert string_hash("") == 0
        assert string_hash("a") == 97
        assert string_hash("ab") == 3105
        assert string_hash("hello") == 99162322

    def test_hash_wraps_to_signed_32_bits(self):
        value = string_hash("the quick brown fox jumps over the lazy dog")
        assert -(2**31) <= value < 2**31

    def test_coerce_rejects_non_str(self):
        with pytest.raises(InvalidValueError):
            STRING.coerce(5)

    def test_quoted_argument(self):
        assert _arg(STRING, "hello there") == "hello there"


class TestEnum:
    def test_kind_is_cached(self):
        assert enum_kind(Difficulty) is enum_kind(Difficulty)

    def test_label_and_fallback(self):
        kind = enum_kind(Difficulty)
        assert kind.label == "enum<Difficulty>"
        assert kind.fallback is Difficulty.PEACEFUL
        assert kind.argument_type == ArgumentType.STRING

    def test_decode_by_name(self):
        assert enum_kind(Difficulty).decode("HARD") is Difficulty.HARD

    def test_unknown_constant_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gamerules.kinds"):
            assert enum_kind(Difficulty).decode("NOT_A_CONSTANT") is Difficulty.PEACEFUL
        assert "NOT_A_CONSTANT" in caplog.text

    def test_command_result_is_ordinal(self):
        kind = enum_kind(Difficulty)
        assert kind.command_result(Difficulty.PEACEFUL) == 0
        assert kind.command_result(Difficulty.HARD) == 2

    def test_empty_enum_rejected(self):
        with pytest.raises(ValueError, match="No constants"):
            enum_kind(Empty)

    def test_argument(self):
        kind = enum_kind(Difficulty)
        assert _arg(kind, "EASY") is Difficulty.EASY
        assert _arg(kind, "easy") is Difficulty.PEACEFUL


class TestFallbackTotality:
    @pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.label)
    def test_decode_never_raises_and_is_stable(self, kind):
        for text in GARBAGE:
            first = kind.decode(text)
            assert kind.decode(text) == first

    @pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.label)
    def test_empty_text_is_fallback(self, kind):
        assert kind.decode("") == kind.fallback


class TestCustomKind:
    def test_new_kind_needs_only_its_functions(self):
        def parse(text):
            parts = text.split(",")
            if len(parts) != 2:
                raise ValueError("expected x,z")
            return (int(parts[0]), int(parts[1]))

        def check(value):
            if not (isinstance(value, tuple) and len(value) == 2):
                raise InvalidValueError("expected a pair")
            return value

        position = RuleKind(
            label="position",
            argument_type=ArgumentType.STRING,
            fallback=(0, 0),
            parser=parse,
            encoder=lambda v: f"{v[0]},{v[1]}",
            reducer=lambda v: abs(v[0]) + abs(v[1]),
            checker=check,
            converter=lambda raw: parse(str(raw)),
        )
        assert position.decode("3,-4") == (3, -4)
        assert position.decode("nope") == (0, 0)
        assert position.encode((3, -4)) == "3,-4"
        assert position.command_result((3, -4)) == 7
        assert _arg(position, "1,2") == (1, 2)


class TestKindLookup:
    def test_known_labels(self):
        assert kind_for_label("boolean") is BOOLEAN
        assert kind_for_label("double") is DOUBLE

    def test_unknown_label(self):
        with pytest.raises(ValueError, match="Unknown rule kind"):
            kind_for_label("long")
