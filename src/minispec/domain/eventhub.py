"""Publish/subscribe hub shared by tests and suites.

`EventEmitter` keeps an ordered registry of listeners per channel and
dispatches events to them synchronously. The registry of a channel is
snapshotted before dispatch, so listeners added or removed by a running
listener only affect later emits. Listener exceptions never reach the
caller of `emit`: they are logged and re-emitted as ``error`` events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, NamedTuple, Self

from .events import ALL, ERROR, Event

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]
EventLike = Event | str | Mapping[str, Any] | None


class Listener(NamedTuple):
    """A registered callback, optionally bound to a context value."""

    callback: Callback
    context: Any = None

    def __call__(self, event: Event) -> Any:
        if self.context is None:
            return self.callback(event)
        return self.callback(self.context, event)

    def matches(self, callback: Callback, context: Any = None) -> bool:
        """Return True if this entry registers `callback` (and `context`, if given).

        A wrapper created by `EventEmitter.once` matches the callback it wraps.
        """
        if (
            self.callback is not callback
            and getattr(self.callback, "_once_of", None) is not callback
        ):
            return False
        return context is None or self.context is context


def _channels(channel: Any) -> list[str]:
    """Split a whitespace-separated channel specification into names."""
    if not isinstance(channel, str):
        return []
    return channel.split()


def _listener_name(fn: Callback) -> str:
    if hasattr(fn, "__name__"):
        return fn.__name__
    if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
        return fn.func.__name__
    return repr(fn)


class EventEmitter:
    """Custom events for any object.

    Listeners are registered per channel and called with the event as their
    only argument, or with ``(context, event)`` when registered with a
    context. Listeners on the wildcard channel ``"all"`` receive every event
    after the channel's own listeners.

    Example:
        ```py
        events = EventEmitter()
        events.on("greet", lambda event: print(event.message))
        events.emit({"type": "greet", "message": "hello"})
        ```
    """

    # Created lazily on first registration.
    _listeners: dict[str, list[Listener]] | None = None

    def on(self, channel: str, listener: Callback, context: Any = None) -> Self:
        """Register `listener` on each channel named in `channel`.

        Args:
            channel: A channel name, or several separated by whitespace.
            listener: Callable invoked with the event.
            context: Optional value passed as the listener's first argument.

        Returns:
            The emitter, for chaining. Invalid channels or non-callable
            listeners are ignored.
        """
        names = _channels(channel)
        if not names or not callable(listener):
            return self
        if self._listeners is None:
            self._listeners = {}
        for name in names:
            self._listeners.setdefault(name, []).append(Listener(listener, context))
        return self

    def _prepend(self, channel: str, listener: Callback) -> Self:
        """Register `listener` ahead of every listener already on `channel`.

        A listener at the head of its list runs even when a later one stops
        the dispatch by returning ``False``.
        """
        if self._listeners is None:
            self._listeners = {}
        self._listeners.setdefault(channel, []).insert(0, Listener(listener))
        return self

    def off(
        self,
        channel: str | None = None,
        listener: Callback | None = None,
        context: Any = None,
    ) -> Self:
        """Remove listeners.

        With no arguments every listener on every channel is removed. With only
        a channel, all of that channel's listeners are removed. With a channel
        and a listener, only entries registering that listener (and `context`,
        when given) are removed; a channel left empty is deleted.

        Returns:
            The emitter, for chaining.
        """
        if channel is None and listener is None:
            self._listeners = None
            return self
        if not self._listeners:
            return self
        for name in _channels(channel):
            if name not in self._listeners:
                continue
            if listener is None:
                del self._listeners[name]
                continue
            remaining = [
                entry
                for entry in self._listeners[name]
                if not entry.matches(listener, context)
            ]
            if remaining:
                self._listeners[name] = remaining
            else:
                del self._listeners[name]
        if not self._listeners:
            self._listeners = None
        return self

    def once(self, channel: str, listener: Callback, context: Any = None) -> Self:
        """Register `listener` to be called at most once.

        The registered wrapper unregisters itself before forwarding the event.
        """
        if not callable(listener):
            return self

        def wrapper(*args: Any) -> Any:
            self.off(channel, wrapper)
            return listener(*args)

        # pylint: disable-next=protected-access
        wrapper._once_of = listener  # type: ignore[attr-defined]
        return self.on(channel, wrapper, context)

    def listeners(self, channel: str) -> list[Callback]:
        """Return a snapshot of the callbacks registered on `channel`."""
        if not self._listeners:
            return []
        return [entry.callback for entry in self._listeners.get(channel, ())]

    def emit(self, event: EventLike) -> Self:
        """Dispatch an event to its channel's listeners, then to wildcard listeners.

        Args:
            event: A channel name, an `Event`, or a mapping with a ``type`` key.
                Anything else is ignored. The event's ``target`` defaults to
                this emitter.

        Returns:
            The emitter, for chaining. Never raises for listener failures.
        """
        if (evt := Event.coerce(event)) is None:
            return self
        if evt.target is None:
            evt.target = self
        registry = self._listeners or {}
        # Both lists are copied before any listener runs.
        direct = list(registry.get(evt.type, ()))
        wildcard = list(registry.get(ALL, ())) if evt.type != ALL else []
        self._dispatch(evt, direct)
        self._dispatch(evt, wildcard)
        return self

    def _dispatch(self, event: Event, listeners: Iterable[Listener]) -> None:
        for listener in listeners:
            try:
                result = listener(event)
            except Exception as exc:  # pylint: disable=broad-except
                logger.debug(
                    "Listener %s raised while handling %r event",
                    _listener_name(listener.callback),
                    event.type,
                    exc_info=True,
                )
                if event.type != ERROR:
                    self.emit(
                        Event(ERROR, target=self, error=exc, extra={"event": event})
                    )
                continue
            if result is False:
                break
