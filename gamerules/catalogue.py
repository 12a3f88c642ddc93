"""Host rule catalogue: the name -> RuleType map shared with built-in rules."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from gamerules.errors import DuplicateRuleError
from gamerules.rules.base import RuleType


class HostCatalogue(Protocol):
    """The host's native name -> RuleType catalogue."""

    def exists(self, name: str) -> bool: ...

    def put(self, name: str, rule_type: RuleType) -> None:
        """Add an entry; raises DuplicateRuleError if the name exists."""
        ...

    def lookup(self, name: str) -> Optional[RuleType]: ...

    def entries(self) -> Iterable[tuple[str, RuleType]]: ...


class InMemoryCatalogue:
    """Dict-backed host catalogue, iterated in insertion order.

    Entries passed to the constructor are marked as built-in.
    """

    def __init__(self, entries: Optional[Iterable[tuple[str, RuleType]]] = None) -> None:
        self._types: dict[str, RuleType] = {}
        self._builtin: set[str] = set()
        for name, rule_type in entries or ():
            self.put(name, rule_type)
            self._builtin.add(name)

    def exists(self, name: str) -> bool:
        return name in self._types

    def put(self, name: str, rule_type: RuleType) -> None:
        if name in self._types:
            raise DuplicateRuleError(name)
        self._types[name] = rule_type

    def lookup(self, name: str) -> Optional[RuleType]:
        return self._types.get(name)

    def entries(self) -> Iterable[tuple[str, RuleType]]:
        return list(self._types.items())

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin

    def __len__(self) -> int:
        return len(self._types)
