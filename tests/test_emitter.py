"""Tests for the event registry."""

from firmatalib import Emitter


def test_emit_calls_handlers_in_order():
    emitter = Emitter()
    calls = []
    emitter.on("event", lambda value: calls.append(("a", value)))
    emitter.on("event", lambda value: calls.append(("b", value)))
    assert emitter.emit("event", 5) is True
    assert calls == [("a", 5), ("b", 5)]


def test_emit_without_listeners_returns_false():
    assert Emitter().emit("nothing") is False


def test_once_handler_runs_once():
    emitter = Emitter()
    calls = []
    emitter.once("event", lambda: calls.append(1))
    emitter.emit("event")
    emitter.emit("event")
    assert calls == [1]
    assert emitter.listener_count("event") == 0


def test_once_handler_removed_before_it_runs():
    emitter = Emitter()
    calls = []

    def handler():
        calls.append(1)
        emitter.emit("event")

    emitter.once("event", handler)
    emitter.emit("event")
    assert calls == [1]


def test_once_does_not_remove_persistent_subscription_of_same_handler():
    emitter = Emitter()
    calls = []
    handler = lambda: calls.append(1)
    emitter.on("event", handler)
    emitter.once("event", handler)
    emitter.emit("event")
    emitter.emit("event")
    assert calls == [1, 1, 1]


def test_remove_listener():
    emitter = Emitter()
    calls = []
    handler = emitter.on("event", lambda: calls.append(1))
    assert emitter.remove_listener("event", handler) is True
    assert emitter.remove_listener("event", handler) is False
    emitter.emit("event")
    assert calls == []


def test_remove_all_listeners():
    emitter = Emitter()
    emitter.on("a", lambda: None)
    emitter.on("b", lambda: None)
    emitter.remove_all_listeners("a")
    assert emitter.event_names() == ["b"]
    emitter.remove_all_listeners()
    assert emitter.event_names() == []


def test_handler_added_during_emit_waits_for_next_emit():
    emitter = Emitter()
    calls = []

    def first():
        calls.append("first")
        emitter.on("event", lambda: calls.append("late"))

    emitter.on("event", first)
    emitter.emit("event")
    assert calls == ["first"]
