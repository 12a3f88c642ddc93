"""Shared test fixtures for gamerules."""

import pytest

from gamerules.registry import Registry
from gamerules.rules.builtin import builtin_catalogue
from gamerules.world import Server


class Recorder:
    """Change callback factory that records (label, server, rule) calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object, object]] = []

    def callback(self, label: str):
        def _record(server, rule):
            self.calls.append((label, server, rule))

        _record.__name__ = f"record_{label}"
        return _record

    @property
    def labels(self) -> list[str]:
        return [label for label, _, _ in self.calls]


@pytest.fixture
def registry():
    """An empty registry over a fresh in-memory catalogue."""
    return Registry()


@pytest.fixture
def host_registry():
    """A registry whose catalogue holds the host's built-in rules."""
    return Registry(builtin_catalogue())


@pytest.fixture
def server(registry):
    return Server("test-server", registry)


@pytest.fixture
def recorder():
    return Recorder()
