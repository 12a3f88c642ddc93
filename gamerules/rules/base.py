"""Rule types, rule keys and rule instances.

A RuleType binds a kind to a default value and a primary change callback,
and owns the Notifiers that other code appends to. A Rule holds the current
value for one owning server and runs the change protocol when it is set:
the primary callback first, then every notifier in the order added.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from gamerules.errors import InvalidDefaultError, InvalidValueError
from gamerules.kinds import RuleKind
from gamerules.notifiers import ChangeCallback, Notifiers

if TYPE_CHECKING:
    from gamerules.commands import ArgumentReader

V = TypeVar("V")


def noop(server: Any, rule: "Rule") -> None:
    """Change callback that does nothing."""


@dataclass(frozen=True)
class RuleKey(Generic[V]):
    """Typed handle to a registered rule.

    Keys compare equal when both the name and the kind match, so a key
    for the same name but another kind does not address the rule.
    """

    name: str
    kind: RuleKind[V]

    def __str__(self) -> str:
        return self.name


class RuleType(Generic[V]):
    """Immutable descriptor registered under a rule name."""

    __slots__ = ("_kind", "_default", "_callback", "_notifiers")

    def __init__(
        self,
        kind: RuleKind[V],
        default: V,
        callback: ChangeCallback = noop,
    ) -> None:
        """Raises InvalidDefaultError if `default` is not a valid value of `kind`."""
        try:
            self._default = kind.coerce(default)
        except InvalidValueError as exc:
            raise InvalidDefaultError(f"Invalid default for {kind.label} rule: {exc}") from exc
        self._kind = kind
        self._callback = callback
        self._notifiers: Notifiers[V] = Notifiers()

    @property
    def kind(self) -> RuleKind[V]:
        return self._kind

    @property
    def default(self) -> V:
        return self._default

    @property
    def callback(self) -> ChangeCallback:
        return self._callback

    @property
    def notifiers(self) -> Notifiers[V]:
        return self._notifiers

    def create_rule(self) -> "Rule[V]":
        """Build a new rule instance holding the default value."""
        return Rule(self, self._default)

    def __repr__(self) -> str:
        return f"RuleType({self._kind.label}, default={self._default!r})"


def create_type(
    kind: RuleKind[V],
    default: Optional[V] = None,
    callback: Optional[ChangeCallback] = None,
) -> RuleType[V]:
    """Create a rule type, defaulting to the kind's fallback and a no-op callback.

    Raises:
        InvalidDefaultError: If `default` is not a valid value of `kind`.
    """
    if callback is not None and not callable(callback):
        raise TypeError(f"Change callback must be callable, got {callback!r}")
    return RuleType(kind, kind.fallback if default is None else default, callback or noop)


class Rule(Generic[V]):
    """The current value of one rule for one owning server."""

    def __init__(self, rule_type: RuleType[V], value: V) -> None:
        self._type = rule_type
        self._value = value

    @property
    def type(self) -> RuleType[V]:
        return self._type

    @property
    def kind(self) -> RuleKind[V]:
        return self._type.kind

    def get(self) -> V:
        return self._value

    def set(self, value: V, server: Any = None) -> None:
        """Replace the value, then notify if a server is given.

        Raises:
            InvalidValueError: The value is not valid for this kind; the
                stored value is left unchanged.
        """
        self._value = self.kind.coerce(value)
        self.changed(server)

    def set_from_command(self, reader: "ArgumentReader", name: str, server: Any) -> None:
        """Set the value from a parsed command argument."""
        if server is None:
            raise ValueError("Commands must run against a server")
        self.set(self.kind.parse_argument(reader, name), server)

    def deserialize(self, text: str) -> None:
        """Load a persisted value without notifying anyone."""
        self._value = self.kind.decode(text)

    def serialize(self) -> str:
        return self.kind.encode(self._value)

    def command_result(self) -> int:
        return self.kind.command_result(self._value)

    def changed(self, server: Any) -> None:
        """Run the change protocol: primary callback, then notifiers in order."""
        if server is None:
            return
        self._type.callback(server, self)
        self._type.notifiers.on_each(server, self)

    def __repr__(self) -> str:
        return f"Rule({self.kind.label}, {self._value!r})"
