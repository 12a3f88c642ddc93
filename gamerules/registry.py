"""Rule registry: name-unique registration over the host's rule catalogue.

The registry never stores rules itself. It validates names, builds typed
keys and appends observers, while the host catalogue (injected through the
HostCatalogue protocol) keeps the name -> RuleType mapping shared with the
host's built-in rules. Names are never removed.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterator, Optional, TypeVar

from gamerules.catalogue import HostCatalogue, InMemoryCatalogue
from gamerules.errors import DuplicateRuleError, NoSuchRuleError
from gamerules.kinds import BOOLEAN, DOUBLE, FLOAT, INT, STRING, RuleKind, enum_kind
from gamerules.notifiers import ChangeCallback
from gamerules.rules.base import RuleKey, RuleType, create_type
from gamerules.rules.builtin import builtin_catalogue

logger = logging.getLogger(__name__)

V = TypeVar("V")
E = TypeVar("E", bound=Enum)
F = TypeVar("F", bound=Callable)


class Registry:
    """Registers uniquely-named rule types and hands out typed keys."""

    def __init__(self, catalogue: Optional[HostCatalogue] = None) -> None:
        self.catalogue: HostCatalogue = catalogue if catalogue is not None else InMemoryCatalogue()
        self.extensions: set[str] = set()

    def register(self, name: str, rule_type: RuleType[V]) -> RuleKey[V]:
        """Add `rule_type` under `name` and return its key.

        Raises:
            DuplicateRuleError: If the name is already taken. Nothing is
                changed in that case.
        """
        if not isinstance(rule_type, RuleType):
            raise TypeError(f"Expected a RuleType, got {rule_type!r}")
        if self.catalogue.exists(name):
            raise DuplicateRuleError(name)
        self.catalogue.put(name, rule_type)
        logger.info("Registered %s rule %r", rule_type.kind.label, name)
        return RuleKey(name, rule_type.kind)

    def find(self, name: str, kind: Optional[RuleKind[V]] = None) -> Optional[RuleKey[V]]:
        """Look up a key by exact name, optionally requiring a kind."""
        rule_type = self.catalogue.lookup(name)
        if rule_type is None:
            return None
        if kind is not None and rule_type.kind is not kind:
            return None
        return RuleKey(name, rule_type.kind)

    def get(self, name: str, kind: Optional[RuleKind[V]] = None) -> RuleKey[V]:
        """Like find(), but raises NoSuchRuleError on a miss."""
        key = self.find(name, kind)
        if key is None:
            rule_type = self.catalogue.lookup(name)
            if rule_type is not None and kind is not None:
                raise NoSuchRuleError(
                    name, f"registered as {rule_type.kind.label}, not {kind.label}"
                )
            raise NoSuchRuleError(name)
        return key

    def type_of(self, key: RuleKey[V]) -> RuleType[V]:
        """Return the registered type for `key`.

        Raises:
            NoSuchRuleError: If no rule of that name and kind is registered.
        """
        rule_type = self.catalogue.lookup(key.name)
        if rule_type is None or rule_type.kind is not key.kind:
            raise NoSuchRuleError(key.name)
        return rule_type

    def add_change_observer(self, key: RuleKey[V], callback: ChangeCallback) -> None:
        """Append `callback` to the notifiers of the rule behind `key`.

        Raises:
            NoSuchRuleError: The key is unknown to this registry.
            DuplicateCallbackError: The callback was already added.
        """
        self.type_of(key).notifiers.add(callback)
        logger.debug("Added change observer %r to %r", callback, key.name)

    def keys(self) -> list[RuleKey]:
        """Every key in the catalogue, built-in and extended, in registration order."""
        return [RuleKey(name, rule_type.kind) for name, rule_type in self.catalogue.entries()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.catalogue.exists(name)

    def __iter__(self) -> Iterator[RuleKey]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())


# Process-wide registry over the host catalogue, used by the functions below
default_registry = Registry(builtin_catalogue())


def _target(registry: Optional[Registry]) -> Registry:
    return registry if registry is not None else default_registry


def register(name: str, rule_type: RuleType[V], *, registry: Optional[Registry] = None) -> RuleKey[V]:
    return _target(registry).register(name, rule_type)


def find(name: str, kind: Optional[RuleKind[V]] = None, *, registry: Optional[Registry] = None) -> Optional[RuleKey[V]]:
    return _target(registry).find(name, kind)


def get(name: str, kind: Optional[RuleKind[V]] = None, *, registry: Optional[Registry] = None) -> RuleKey[V]:
    return _target(registry).get(name, kind)


def observe(key: RuleKey[V], callback: ChangeCallback, *, registry: Optional[Registry] = None) -> None:
    """Add a change callback to the rule behind `key`."""
    _target(registry).add_change_observer(key, callback)


def on_change(key: RuleKey, *, registry: Optional[Registry] = None) -> Callable[[F], F]:
    """Decorator form of observe(); returns the function unchanged."""

    def decorator(func: F) -> F:
        observe(key, func, registry=registry)
        return func

    return decorator


def boolean_rule(
    name: str,
    default: bool = False,
    callback: Optional[ChangeCallback] = None,
    *,
    registry: Optional[Registry] = None,
) -> RuleKey[bool]:
    """Create and register a boolean rule."""
    return register(name, create_type(BOOLEAN, default, callback), registry=registry)


def int_rule(
    name: str,
    default: int = 0,
    callback: Optional[ChangeCallback] = None,
    *,
    registry: Optional[Registry] = None,
) -> RuleKey[int]:
    """Create and register an integer rule."""
    return register(name, create_type(INT, default, callback), registry=registry)


def float_rule(
    name: str,
    default: float = 0.0,
    callback: Optional[ChangeCallback] = None,
    *,
    registry: Optional[Registry] = None,
) -> RuleKey[float]:
    """Create and register a single-precision float rule.

    Raises:
        InvalidDefaultError: If `default` is not finite.
    """
    return register(name, create_type(FLOAT, default, callback), registry=registry)


def double_rule(
    name: str,
    default: float = 0.0,
    callback: Optional[ChangeCallback] = None,
    *,
    registry: Optional[Registry] = None,
) -> RuleKey[float]:
    """Create and register a double rule.

    Raises:
        InvalidDefaultError: If `default` is not finite.
    """
    return register(name, create_type(DOUBLE, default, callback), registry=registry)


def string_rule(
    name: str,
    default: str = "",
    callback: Optional[ChangeCallback] = None,
    *,
    registry: Optional[Registry] = None,
) -> RuleKey[str]:
    """Create and register a string rule."""
    return register(name, create_type(STRING, default, callback), registry=registry)


def enum_rule(
    name: str,
    enum_cls: type[E],
    default: Optional[E] = None,
    callback: Optional[ChangeCallback] = None,
    *,
    registry: Optional[Registry] = None,
) -> RuleKey[E]:
    """Create and register an enum rule; the default is the first member if omitted.

    Raises:
        ValueError: If `enum_cls` has no members.
    """
    return register(name, create_type(enum_kind(enum_cls), default, callback), registry=registry)
