"""Text command surface: argument reading and the gamerule command.

`gamerule <name>` queries a rule, `gamerule <name> <value>` sets it. Setting
goes through the rule's kind to parse the argument and through the full
change protocol, so observers fire exactly as for programmatic changes.
"""

from __future__ import annotations

import logging
import shlex
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from gamerules.errors import CommandSyntaxError
from gamerules.kinds import INT_MAX, INT_MIN
from gamerules.models import ArgumentType, CommandOutcome

if TYPE_CHECKING:
    from gamerules.registry import Registry
    from gamerules.world import Server

logger = logging.getLogger(__name__)

VALUE_ARGUMENT = "value"


class ArgumentReader(Protocol):
    """Host reader that yields a raw value for a named command argument."""

    def get_argument(self, name: str, argument_type: ArgumentType) -> Any:
        """Return the raw argument, raising CommandSyntaxError if it cannot be read."""
        ...


def _read_bool(token: str) -> bool:
    if token == "true":
        return True
    if token == "false":
        return False
    raise ValueError("Invalid boolean, expected 'true' or 'false'")


def _read_int(token: str) -> int:
    try:
        value = int(token)
    except ValueError:
        raise ValueError("Invalid integer") from None
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError(f"Integer must be between {INT_MIN} and {INT_MAX}")
    return value


def _read_decimal(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise ValueError("Invalid decimal number") from None


_READERS = {
    ArgumentType.BOOL: _read_bool,
    ArgumentType.INTEGER: _read_int,
    ArgumentType.FLOAT: _read_decimal,
    ArgumentType.DOUBLE: _read_decimal,
    ArgumentType.STRING: str,
}


class TextArgumentReader:
    """Reads arguments from raw text tokens keyed by argument name.

    `source` is the full command line, used only to point at the bad
    token in syntax errors.
    """

    def __init__(self, values: Mapping[str, str], source: str = "") -> None:
        self.values = dict(values)
        self.source = source

    def get_argument(self, name: str, argument_type: ArgumentType) -> Any:
        if name not in self.values:
            raise CommandSyntaxError(f"Missing argument: {name}", self.source, len(self.source))
        token = self.values[name]
        try:
            return _READERS[argument_type](token)
        except ValueError as exc:
            position = self.source.rfind(token) if self.source else 0
            raise CommandSyntaxError(f"{exc}: {token!r}", self.source, max(position, 0)) from None


def _split(line: str) -> list[str]:
    try:
        return shlex.split(line)
    except ValueError as exc:
        raise CommandSyntaxError(f"Malformed command: {exc}", line, len(line)) from None


class GameRuleCommand:
    """The `gamerule` command, bound to a registry."""

    name = "gamerule"

    def __init__(self, registry: "Registry") -> None:
        self.registry = registry

    def execute(self, server: "Server", line: str) -> CommandOutcome:
        """Run one command line against `server`.

        Raises:
            CommandSyntaxError: The line is malformed or the value cannot be
                read as the rule's argument type.
            NoSuchRuleError: The named rule does not exist.
        """
        tokens = _split(line.strip())
        if tokens and tokens[0].lstrip("/") == self.name:
            tokens = tokens[1:]
        if not tokens:
            raise CommandSyntaxError("Expected a rule name", line, len(line))
        if len(tokens) > 2:
            raise CommandSyntaxError("Too many arguments", line, max(line.rfind(tokens[2]), 0))

        rule_name = tokens[0]
        if len(tokens) == 1:
            return self.query(server, rule_name)
        reader = TextArgumentReader({VALUE_ARGUMENT: tokens[1]}, source=line)
        return self.set(server, rule_name, reader)

    def query(self, server: "Server", rule_name: str) -> CommandOutcome:
        key = self.registry.get(rule_name)
        rule = server.game_rules.get(key)
        value = rule.serialize()
        return CommandOutcome(
            rule=rule_name,
            value=value,
            result=rule.command_result(),
            message=f"Gamerule {rule_name} is currently set to: {value}",
        )

    def set(self, server: "Server", rule_name: str, reader: ArgumentReader) -> CommandOutcome:
        key = self.registry.get(rule_name)
        rule = server.game_rules.get(key)
        before = rule.serialize()
        rule.set_from_command(reader, VALUE_ARGUMENT, server)
        value = rule.serialize()
        logger.info("Gamerule %s changed from %s to %s on %s", rule_name, before, value, server.name)
        return CommandOutcome(
            rule=rule_name,
            value=value,
            result=rule.command_result(),
            changed=value != before,
            message=f"Gamerule {rule_name} is now set to: {value}",
        )

    def suggest(self, prefix: str = "") -> list[str]:
        """Rule names starting with `prefix`, for command completion."""
        return sorted(key.name for key in self.registry.keys() if key.name.startswith(prefix))
