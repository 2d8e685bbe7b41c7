"""Lifecycle events — observer registration for the dispatch pipeline.

Callbacks subscribe to a named event and are called, in subscription
order, as invocations pass through the router::

    router.on("request", lambda ctx: metrics.incr("invocations"))
    router.on("error", report_error)   # (ctx, exc)

Events:
    request -- (ctx) after the context is built, before resolution
    response -- (ctx, value) after a successful chain
    error -- (ctx, exc) after a failed chain

Callbacks may be sync or async. A callback that raises is logged and
skipped; it never changes the outcome of the invocation.

Thread safety:
    Subscription is guarded by a Lock. ``emit`` iterates a snapshot,
    so callbacks can subscribe or unsubscribe while an event is
    being delivered.
"""

import logging
import threading
from typing import Any

from cloudrouter._internal.invoke import invoke
from cloudrouter._internal.types import Listener

logger = logging.getLogger("cloudrouter.events")

REQUEST = "request"
RESPONSE = "response"
ERROR = "error"

EVENT_NAMES: frozenset[str] = frozenset({REQUEST, RESPONSE, ERROR})


class LifecycleEvents:
    """Named-event observer registry."""

    __slots__ = ("_listeners", "_lock")

    def __init__(self) -> None:
        self._listeners: dict[str, tuple[Listener, ...]] = {name: () for name in EVENT_NAMES}
        self._lock = threading.Lock()

    @staticmethod
    def _check(name: str) -> None:
        if name not in EVENT_NAMES:
            known = ", ".join(sorted(EVENT_NAMES))
            msg = f"unknown lifecycle event {name!r} (expected one of: {known})"
            raise ValueError(msg)

    def subscribe(self, name: str, callback: Listener) -> None:
        """Call *callback* whenever *name* is emitted."""
        self._check(name)
        if not callable(callback):
            msg = "lifecycle callback must be a callable"
            raise TypeError(msg)
        with self._lock:
            self._listeners[name] = (*self._listeners[name], callback)

    def unsubscribe(self, name: str, callback: Listener) -> bool:
        """Remove the first subscription of *callback*. Returns whether one was found."""
        self._check(name)
        with self._lock:
            listeners = list(self._listeners[name])
            try:
                listeners.remove(callback)
            except ValueError:
                return False
            self._listeners[name] = tuple(listeners)
            return True

    def listeners(self, name: str) -> tuple[Listener, ...]:
        self._check(name)
        return self._listeners[name]

    async def emit(self, name: str, *args: Any) -> None:
        """Deliver *name* to every subscriber."""
        for callback in self.listeners(name):
            try:
                await invoke(callback, *args)
            except Exception:
                logger.exception("lifecycle %r callback %r failed", name, callback)
