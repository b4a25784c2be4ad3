"""Unit tests for the EventEmitter hub."""

import logging
from functools import partial, wraps

from minispec.domain.eventhub import EventEmitter
from minispec.domain.events import ALL, ERROR, Event

# pylint: disable=unused-argument


# --- Helpers ---


class Calls:
    """Callable recording the events it receives under a label."""

    def __init__(self, log: list, label: str, result=None):
        self.log = log
        self.label = label
        self.result = result

    def __call__(self, event):
        self.log.append((self.label, event))
        return self.result


def labels(log: list) -> list[str]:
    """Return the labels of a call log."""
    return [label for label, _ in log]


# --- Registration and dispatch ---


def test_listeners_run_in_registration_order():
    """on("x", f).on("x", g).emit("x") calls f then g."""
    log: list = []
    events = EventEmitter()
    events.on("x", Calls(log, "f")).on("x", Calls(log, "g")).emit("x")
    assert labels(log) == ["f", "g"]


def test_false_return_stops_remaining_listeners():
    """A listener returning False prevents later listeners of the same dispatch."""
    log: list = []
    events = EventEmitter()
    events.on("x", Calls(log, "f", result=False)).on("x", Calls(log, "g"))
    events.emit("x")
    assert labels(log) == ["f"]


def test_falsy_non_false_return_does_not_stop_dispatch():
    """Only exactly False stops dispatch; None, 0 and "" do not."""
    log: list = []
    events = EventEmitter()
    events.on("x", Calls(log, "a", result=0)).on("x", Calls(log, "b", result=""))
    events.on("x", Calls(log, "c"))
    events.emit("x")
    assert labels(log) == ["a", "b", "c"]


def test_false_on_channel_does_not_stop_wildcard_listeners():
    """Stopping a channel's listeners leaves the wildcard listeners alone."""
    log: list = []
    events = EventEmitter()
    events.on("x", Calls(log, "f", result=False)).on("x", Calls(log, "g"))
    events.on(ALL, Calls(log, "all"))
    events.emit("x")
    assert labels(log) == ["f", "all"]


def test_duplicate_registrations_fire_twice():
    """Registering the same listener twice calls it twice."""
    log: list = []
    events = EventEmitter()
    listener = Calls(log, "f")
    events.on("x", listener).on("x", listener).emit("x")
    assert labels(log) == ["f", "f"]


def test_wildcard_listeners_receive_every_event_after_channel_listeners():
    """Wildcard listeners see every event, after the channel's own listeners."""
    log: list = []
    events = EventEmitter()
    events.on(ALL, Calls(log, "all"))
    events.on("x", Calls(log, "x"))
    events.emit("x").emit("y")
    assert [(label, event.type) for label, event in log] == [
        ("x", "x"),
        ("all", "x"),
        ("all", "y"),
    ]


def test_emitting_the_wildcard_channel_calls_its_listeners_once():
    """An event of type "all" reaches wildcard listeners exactly once."""
    log: list = []
    events = EventEmitter()
    events.on(ALL, Calls(log, "all")).emit(ALL)
    assert labels(log) == ["all"]


def test_whitespace_separated_channels_register_on_each():
    """A channel string with spaces registers on every named channel."""
    log: list = []
    events = EventEmitter()
    events.on("a  b\tc", Calls(log, "f"))
    events.emit("a").emit("b").emit("c")
    assert [event.type for _, event in log] == ["a", "b", "c"]


def test_context_is_passed_as_first_argument():
    """A listener registered with a context is called as listener(context, event)."""
    received = []
    events = EventEmitter()
    context = object()
    events.on("x", lambda ctx, event: received.append((ctx, event.type)), context)
    events.emit("x")
    assert received == [(context, "x")]


def test_invalid_registrations_are_ignored():
    """Non-string or blank channels and non-callable listeners are ignored."""
    events = EventEmitter()
    assert events.on(None, print) is events  # type: ignore[arg-type]
    assert events.on("   ", print) is events
    assert events.on("x", "not callable") is events  # type: ignore[arg-type]
    assert events.listeners("x") == []


def test_registry_is_per_instance():
    """Emitters never share listeners."""
    first, second = EventEmitter(), EventEmitter()
    first.on("x", print)
    assert first.listeners("x") == [print]
    assert second.listeners("x") == []


# --- Payloads ---


def test_emit_fills_in_target():
    """The emitter becomes the event target unless one is given."""
    received = []
    events = EventEmitter()
    other = object()
    events.on(ALL, received.append)
    events.emit("x").emit(Event("y", target=other))
    assert received[0].target is events
    assert received[1].target is other


def test_emit_accepts_mappings_with_extra_payload():
    """Mapping keys that are not Event fields are kept in extra."""
    received = []
    events = EventEmitter()
    events.on("x", received.append)
    events.emit({"type": "x", "message": "hello", "count": 3})
    (event,) = received
    assert event.message == "hello"
    assert event.extra == {"count": 3}
    assert event.count == 3


def test_emit_ignores_malformed_events():
    """Events without a usable type are dropped without raising."""
    received = []
    events = EventEmitter()
    events.on(ALL, received.append)
    for bad in (None, 42, "", {"message": "no type"}, {"type": 7}):
        assert events.emit(bad) is events  # type: ignore[arg-type]
    assert not received


def test_emit_keeps_a_non_mapping_extra_as_a_value():
    """A mapping event whose extra is not a mapping is still delivered."""
    received = []
    events = EventEmitter()
    events.on("x", received.append)
    assert events.emit({"type": "x", "extra": 5, "note": "n"}) is events
    events.emit({"type": "x", "extra": {"a": 1}})
    first, second = received
    assert first.extra == {"note": "n", "extra": 5}
    assert second.extra == {"a": 1}


# --- Snapshots ---


def test_listeners_added_during_dispatch_wait_for_next_emit():
    """A listener added while dispatching is only called by later emits."""
    log: list = []
    events = EventEmitter()
    late = Calls(log, "late")

    def adder(event):
        log.append(("adder", event))
        events.on("x", late)
        events.on(ALL, late)

    events.on("x", adder)
    events.emit("x")
    assert labels(log) == ["adder"]


def test_listeners_removed_during_dispatch_still_run_for_current_emit():
    """Removing a listener mid-dispatch does not affect the current emit."""
    log: list = []
    events = EventEmitter()
    second = Calls(log, "second")

    def remover(event):
        log.append(("remover", event))
        events.off("x", second)

    events.on("x", remover).on("x", second)
    events.emit("x")
    events.emit("x")
    assert labels(log) == ["remover", "second", "remover"]


# --- Removal ---


def test_off_unknown_listener_is_a_noop():
    """Removing a listener that is not registered changes nothing."""
    log: list = []
    events = EventEmitter()
    listener = Calls(log, "f")
    events.on("x", listener)
    events.off("x", Calls(log, "other")).off("missing", listener)
    events.emit("x")
    assert labels(log) == ["f"]


def test_off_channel_removes_all_its_listeners():
    """Removing every listener of a channel and re-emitting fires nothing."""
    log: list = []
    events = EventEmitter()
    events.on("x", Calls(log, "f")).on("x", Calls(log, "g"))
    events.off("x").emit("x")
    assert not log
    assert events.listeners("x") == []


def test_off_listener_removes_every_duplicate():
    """All entries registering the listener are removed."""
    log: list = []
    events = EventEmitter()
    listener = Calls(log, "f")
    events.on("x", listener).on("x", listener).on("x", Calls(log, "g"))
    events.off("x", listener).emit("x")
    assert labels(log) == ["g"]


def test_off_with_context_only_removes_that_binding():
    """A context narrows removal to registrations with that context."""
    received = []

    def listener(ctx, event):
        received.append(ctx)

    events = EventEmitter()
    events.on("x", listener, "a").on("x", listener, "b")
    events.off("x", listener, "a").emit("x")
    assert received == ["b"]


def test_off_without_arguments_clears_everything():
    """off() removes every listener of every channel."""
    log: list = []
    events = EventEmitter()
    events.on("x", Calls(log, "x")).on(ALL, Calls(log, "all"))
    events.off().emit("x")
    assert not log


def test_off_on_an_emitter_without_listeners_is_a_noop():
    """Removing from an emitter that never had listeners does nothing."""
    events = EventEmitter()
    assert events.off("x", print) is events
    assert events.off("x") is events


# --- once ---


def test_once_fires_a_single_time():
    """A once listener is called for the first emit only."""
    log: list = []
    events = EventEmitter()
    events.once("x", Calls(log, "f"))
    events.emit("x").emit("x")
    assert labels(log) == ["f"]
    assert events.listeners("x") == []


def test_once_listener_can_be_removed_by_original_callable():
    """off() with the original callable removes a once registration."""
    log: list = []
    events = EventEmitter()
    listener = Calls(log, "f")
    events.once("x", listener).off("x", listener).emit("x")
    assert not log


def test_off_leaves_wrapped_listeners_registered_with_on():
    """off(f) removes only f and once-wrappers of f, not other wrappers of f."""
    log: list = []
    events = EventEmitter()
    listener = Calls(log, "f")

    @wraps(listener)
    def decorated(event):
        log.append(("decorated", event))

    events.on("x", decorated).on("x", listener).off("x", listener).emit("x")
    assert labels(log) == ["decorated"]


def test_once_with_context():
    """once forwards the context like on."""
    received = []
    events = EventEmitter()
    events.once("x", lambda ctx, event: received.append(ctx), "ctx")
    events.emit("x").emit("x")
    assert received == ["ctx"]


# --- Listener failures ---


def test_listener_exception_becomes_error_event(caplog):
    """A raising listener is logged and re-emitted as an error event."""
    errors = []
    after = []
    boom = RuntimeError("boom")

    def failing(event):
        raise boom

    events = EventEmitter()
    events.on("x", failing).on("x", after.append).on(ERROR, errors.append)

    with caplog.at_level(logging.DEBUG, logger="minispec"):
        assert events.emit("x") is events

    (error,) = errors
    assert error.error is boom
    assert error.target is events
    assert error.event.type == "x"
    assert [event.type for event in after] == ["x"]
    assert any("failing" in rec.getMessage() for rec in caplog.records)


def test_error_listener_exception_is_not_re_emitted():
    """A failing error listener does not cause another error event."""
    calls = []

    def failing(event):
        calls.append(event)
        raise ValueError("again")

    events = EventEmitter()
    events.on(ERROR, failing)
    events.emit(ERROR)
    assert len(calls) == 1


def test_partial_listener_names_are_logged(caplog):
    """Listeners without a __name__ are logged by their wrapped function."""

    def failing(prefix, event):
        raise RuntimeError(prefix)

    events = EventEmitter()
    events.on("x", partial(failing, "p"))
    with caplog.at_level(logging.DEBUG, logger="minispec"):
        events.emit("x")
    assert any("failing" in rec.getMessage() for rec in caplog.records)
