"""Owning context for rule values: a server and its per-server rule storage."""

from __future__ import annotations

import logging
from typing import Iterator, Mapping, Optional, TypeVar

from gamerules.catalogue import HostCatalogue
from gamerules.errors import NoSuchRuleError
from gamerules.models import RuleInfo
from gamerules.registry import Registry, default_registry
from gamerules.rules.base import Rule, RuleKey, RuleType

logger = logging.getLogger(__name__)

V = TypeVar("V")


class GameRules:
    """One live Rule per catalogue entry, created on first access."""

    def __init__(self, catalogue: HostCatalogue) -> None:
        self.catalogue = catalogue
        self._rules: dict[str, Rule] = {}

    def _type_for(self, name: str) -> RuleType:
        rule_type = self.catalogue.lookup(name)
        if rule_type is None:
            raise NoSuchRuleError(name)
        return rule_type

    def get(self, key: RuleKey[V]) -> Rule[V]:
        """Return the rule for `key`, creating it from its default if needed.

        Raises:
            NoSuchRuleError: The key's name is unknown or its kind differs.
        """
        rule_type = self._type_for(key.name)
        if rule_type.kind is not key.kind:
            raise NoSuchRuleError(
                key.name, f"registered as {rule_type.kind.label}, not {key.kind.label}"
            )
        return self._instance(key.name, rule_type)

    def rule(self, name: str) -> Rule:
        """Return the rule registered under `name`, whatever its kind."""
        return self._instance(name, self._type_for(name))

    def _instance(self, name: str, rule_type: RuleType) -> Rule:
        rule = self._rules.get(name)
        if rule is None:
            rule = rule_type.create_rule()
            self._rules[name] = rule
        return rule

    def snapshot(self) -> dict[str, str]:
        """Encode every catalogue rule, defaults included."""
        return {name: self._instance(name, rule_type).serialize() for name, rule_type in self.catalogue.entries()}

    def load(self, values: Mapping[str, str]) -> int:
        """Deserialize persisted values without firing change callbacks.

        Unknown names are skipped; rules absent from `values` keep their
        current value. Returns the number of rules loaded.
        """
        loaded = 0
        for name, text in values.items():
            rule_type = self.catalogue.lookup(name)
            if rule_type is None:
                logger.warning("Ignoring unknown persisted rule %r", name)
                continue
            self._instance(name, rule_type).deserialize(str(text))
            loaded += 1
        return loaded

    def __iter__(self) -> Iterator[tuple[str, Rule]]:
        for name, rule_type in self.catalogue.entries():
            yield name, self._instance(name, rule_type)


class Server:
    """The owning context passed to change callbacks."""

    def __init__(self, name: str = "server", registry: Optional[Registry] = None) -> None:
        self.name = name
        self.registry = registry if registry is not None else default_registry
        self.game_rules = GameRules(self.registry.catalogue)

    def __repr__(self) -> str:
        return f"Server({self.name!r})"


def get_value(server: Server, key: RuleKey[V]) -> V:
    """Current value of the rule behind `key` on `server`."""
    return server.game_rules.get(key).get()


def set_value(server: Server, key: RuleKey[V], value: V) -> None:
    """Set a rule on `server`, running the change protocol against it."""
    server.game_rules.get(key).set(value, server)


def describe(server: Server) -> list[RuleInfo]:
    """Listing rows for every rule on `server`, in catalogue order."""
    is_builtin = getattr(server.game_rules.catalogue, "is_builtin", None)
    rows: list[RuleInfo] = []
    for name, rule in server.game_rules:
        rows.append(
            RuleInfo(
                name=name,
                kind=rule.kind.label,
                default=rule.kind.encode(rule.type.default),
                value=rule.serialize(),
                builtin=bool(is_builtin(name)) if is_builtin else False,
                observers=len(rule.type.notifiers),
            )
        )
    return rows
