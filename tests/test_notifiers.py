"""Tests for the append-only notifier set."""

import pytest

from gamerules.errors import DuplicateCallbackError
from gamerules.notifiers import Notifiers


class Listener:
    def __init__(self) -> None:
        self.seen = []

    def on_change(self, server, rule):
        self.seen.append((server, rule))


class TestNotifiers:
    def test_calls_in_insertion_order(self, recorder):
        notifiers = Notifiers()
        for label in ["a", "b", "c"]:
            notifiers.add(recorder.callback(label))
        notifiers.on_each("srv", "rule")
        assert recorder.labels == ["a", "b", "c"]
        assert all(server == "srv" and rule == "rule" for _, server, rule in recorder.calls)

    def test_duplicate_rejected(self, recorder):
        notifiers = Notifiers()
        callback = recorder.callback("a")
        notifiers.add(callback)
        with pytest.raises(DuplicateCallbackError):
            notifiers.add(callback)
        assert len(notifiers) == 1

    def test_equal_bound_methods_are_duplicates(self):
        listener = Listener()
        notifiers = Notifiers()
        notifiers.add(listener.on_change)
        with pytest.raises(DuplicateCallbackError):
            notifiers.add(listener.on_change)

    def test_distinct_instances_are_not_duplicates(self):
        notifiers = Notifiers()
        notifiers.add(Listener().on_change)
        notifiers.add(Listener().on_change)
        assert len(notifiers) == 2

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            Notifiers().add("not callable")

    def test_no_removal_api(self):
        notifiers = Notifiers()
        assert not hasattr(notifiers, "remove")
        assert not hasattr(notifiers, "discard")

    def test_error_stops_later_callbacks(self, recorder):
        def boom(server, rule):
            raise RuntimeError("boom")

        notifiers = Notifiers()
        notifiers.add(recorder.callback("a"))
        notifiers.add(boom)
        notifiers.add(recorder.callback("c"))
        with pytest.raises(RuntimeError):
            notifiers.on_each("srv", "rule")
        assert recorder.labels == ["a"]

    def test_iteration_and_membership(self, recorder):
        notifiers = Notifiers()
        a = recorder.callback("a")
        notifiers.add(a)
        assert a in notifiers
        assert list(notifiers) == [a]
