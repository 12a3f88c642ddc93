"""Append-only, ordered collection of change callbacks for one rule type."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, TypeVar

from gamerules.errors import DuplicateCallbackError

if TYPE_CHECKING:
    from gamerules.rules.base import Rule

logger = logging.getLogger(__name__)

V = TypeVar("V")

# (server, rule) -> None
ChangeCallback = Callable[[Any, "Rule[V]"], None]


class Notifiers(Generic[V]):
    """Change callbacks invoked in the order they were added.

    Callbacks are compared by equality, so adding the same function or
    bound method twice is rejected. There is no way to remove one.
    """

    def __init__(self) -> None:
        self._callbacks: list[ChangeCallback] = []

    def add(self, callback: ChangeCallback) -> None:
        if not callable(callback):
            raise TypeError(f"Change callback must be callable, got {callback!r}")
        if callback in self._callbacks:
            raise DuplicateCallbackError(f"Notifier already added: {callback!r}")
        self._callbacks.append(callback)

    def on_each(self, server: Any, rule: "Rule[V]") -> None:
        """Call every callback with (server, rule), stopping at the first error."""
        logger.debug("Calling %d additional change callbacks", len(self._callbacks))
        for callback in self._callbacks:
            callback(server, rule)

    def __contains__(self, callback: object) -> bool:
        return callback in self._callbacks

    def __iter__(self) -> Iterator[ChangeCallback]:
        return iter(tuple(self._callbacks))

    def __len__(self) -> int:
        return len(self._callbacks)
