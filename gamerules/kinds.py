"""Rule kinds: the value types a rule can hold.

A RuleKind carries, as data, the functions that turn text into a value,
a value back into text, a command argument into a value, and a value into
a command result. Adding a new kind means building a RuleKind; nothing
else in the package has to change.

Built-in kinds:
- BOOLEAN: true/false, command result 1/0
- INT: signed 32-bit integers, command result is the value itself
- DOUBLE: finite floats, command result is the sign
- FLOAT: finite single-precision floats, command result is the sign
- STRING: any text, command result is the 32-bit string hash
- enum_kind(E): members of E by name, command result is the ordinal
"""

from __future__ import annotations

import functools
import logging
import math
import re
import struct
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, TypeVar

from gamerules.errors import InvalidValueError
from gamerules.models import ArgumentType

if TYPE_CHECKING:
    from gamerules.commands import ArgumentReader

logger = logging.getLogger(__name__)

V = TypeVar("V")
E = TypeVar("E", bound=Enum)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

# Signed 32-bit range of int rules
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


@dataclass(frozen=True, eq=False)
class RuleKind(Generic[V]):
    """The value type of a rule and the total functions defined over it.

    `parser` may raise ValueError for malformed text; `decode` turns that
    into a warning plus `fallback`. `checker` validates programmatic values
    and raises InvalidValueError. `converter` maps a raw command argument
    to a value and defaults to `checker`.
    """

    label: str
    argument_type: ArgumentType
    fallback: V
    parser: Callable[[str], V]
    encoder: Callable[[V], str]
    reducer: Callable[[V], int]
    checker: Callable[[Any], V]
    converter: Optional[Callable[[Any], V]] = None

    def decode(self, text: str) -> V:
        """Parse persisted or free text. Never raises."""
        if not text:
            return self.fallback
        try:
            return self.parser(text)
        except ValueError as exc:
            logger.warning("Failed to parse %s %r: %s", self.label, text, exc)
            return self.fallback

    def encode(self, value: V) -> str:
        return self.encoder(value)

    def parse_argument(self, reader: "ArgumentReader", name: str) -> V:
        """Read the named command argument and convert it to a value.

        Syntax errors raised by the reader propagate; a value the reader
        produced but this kind rejects (NaN, infinity, unknown enum name)
        is replaced by the fallback.
        """
        raw = reader.get_argument(name, self.argument_type)
        convert = self.converter or self.checker
        try:
            return convert(raw)
        except ValueError as exc:
            logger.warning("Rejected %s argument %r: %s", self.label, raw, exc)
            return self.fallback

    def command_result(self, value: V) -> int:
        return self.reducer(value)

    def coerce(self, value: Any) -> V:
        """Validate a programmatic value, raising InvalidValueError."""
        return self.checker(value)

    def __repr__(self) -> str:
        return f"RuleKind({self.label})"

    def __str__(self) -> str:
        return self.label


# --- Boolean ---


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError("expected true or false")


def _check_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidValueError(f"boolean rule value must be a bool, got {value!r}")
    return value


BOOLEAN: RuleKind[bool] = RuleKind(
    label="boolean",
    argument_type=ArgumentType.BOOL,
    fallback=False,
    parser=_parse_bool,
    encoder=lambda value: "true" if value else "false",
    reducer=int,
    checker=_check_bool,
)


# --- Integer ---


def _parse_int(text: str) -> int:
    stripped = text.strip()
    if not _INT_PATTERN.fullmatch(stripped):
        raise ValueError("not an integer")
    value = int(stripped)
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError("integer out of range")
    return value


def _check_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(f"int rule value must be an int, got {value!r}")
    if not INT_MIN <= value <= INT_MAX:
        raise InvalidValueError(f"int rule value out of range: {value!r}")
    return value


INT: RuleKind[int] = RuleKind(
    label="int",
    argument_type=ArgumentType.INTEGER,
    fallback=0,
    parser=_parse_int,
    encoder=str,
    reducer=lambda value: value,
    checker=_check_int,
)


# --- Floating point ---


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _to_finite(label: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValueError(f"{label} rule value must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise InvalidValueError(f"{label} rule value out of range: {value!r}") from None
    if not math.isfinite(number):
        raise InvalidValueError(f"{label} rule value must be finite, got {value!r}")
    return number


def _parse_double(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError("not a finite number")
    return number


def _check_double(value: Any) -> float:
    return _to_finite("double", value)


DOUBLE: RuleKind[float] = RuleKind(
    label="double",
    argument_type=ArgumentType.DOUBLE,
    fallback=0.0,
    parser=_parse_double,
    encoder=repr,
    reducer=_sign,
    checker=_check_double,
)


def narrow(value: float) -> float:
    """Round a float to IEEE-754 single precision.

    Values too large for single precision become signed infinity.
    """
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _encode_single(value: float) -> str:
    # Shortest decimal that narrows back to the same single-precision value
    for digits in range(1, 10):
        text = f"{value:.{digits}g}"
        if narrow(float(text)) == value:
            break
    if "e" not in text and "." not in text:
        text += ".0"
    return text


def _parse_float(text: str) -> float:
    number = narrow(float(text))
    if not math.isfinite(number):
        raise ValueError("not a finite single-precision number")
    return number


def _check_float(value: Any) -> float:
    number = narrow(_to_finite("float", value))
    if not math.isfinite(number):
        raise InvalidValueError(f"float rule value out of range: {value!r}")
    return number


FLOAT: RuleKind[float] = RuleKind(
    label="float",
    argument_type=ArgumentType.FLOAT,
    fallback=0.0,
    parser=_parse_float,
    encoder=_encode_single,
    reducer=_sign,
    checker=_check_float,
)


# --- String ---


def string_hash(value: str) -> int:
    """Signed 32-bit polynomial hash over UTF-16 code units.

    Unlike hash(), the result is the same in every process.
    """
    data = value.encode("utf-16-be", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        h = (31 * h + ((data[i] << 8) | data[i + 1])) & 0xFFFFFFFF
    return h - (1 << 32) if h & 0x80000000 else h


def _check_str(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidValueError(f"string rule value must be a str, got {value!r}")
    return value


STRING: RuleKind[str] = RuleKind(
    label="string",
    argument_type=ArgumentType.STRING,
    fallback="",
    parser=lambda text: text,
    encoder=lambda value: value,
    reducer=string_hash,
    checker=_check_str,
)


# --- Enum ---


@functools.lru_cache(maxsize=None)
def enum_kind(enum_cls: type[E]) -> RuleKind[E]:
    """Return the kind for members of `enum_cls`.

    The fallback is the first declared member. Calls with the same enum
    class return the same kind.

    Raises:
        ValueError: If the enum declares no members.
    """
    members = list(enum_cls)
    if not members:
        raise ValueError(f"No constants in enum {enum_cls.__name__}")

    def parse(text: str) -> E:
        try:
            return enum_cls[text]
        except KeyError:
            raise ValueError(f"no constant named {text!r} in {enum_cls.__name__}") from None

    def check(value: Any) -> E:
        if not isinstance(value, enum_cls):
            raise InvalidValueError(
                f"{enum_cls.__name__} rule value must be a member of it, got {value!r}"
            )
        return value

    return RuleKind(
        label=f"enum<{enum_cls.__name__}>",
        argument_type=ArgumentType.STRING,
        fallback=members[0],
        parser=parse,
        encoder=lambda value: value.name,
        reducer=members.index,
        checker=check,
        converter=lambda raw: parse(str(raw)),
    )


BUILTIN_KINDS: dict[str, RuleKind] = {
    kind.label: kind for kind in (BOOLEAN, INT, FLOAT, DOUBLE, STRING)
}


def kind_for_label(label: str) -> RuleKind:
    """Look up a built-in (non-enum) kind by its label."""
    try:
        return BUILTIN_KINDS[label]
    except KeyError:
        raise ValueError(
            f"Unknown rule kind: {label!r}. Use one of {', '.join(BUILTIN_KINDS)}."
        ) from None
