"""Host environment — where ``serve()`` finds an omitted event or context.

Function hosts usually pass the event and context straight to the
entry point. Some hosts instead expose them ambiently for the running
invocation. The router never reads such globals directly: it asks an
injected ``HostEnvironment``, so dispatch stays testable without a host.

Provided implementations:
    ContextVarEnvironment -- reads per-invocation ContextVars (default)
    StaticEnvironment -- fixed values, handy in tests and scripts
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Protocol

host_event_var: ContextVar[Any] = ContextVar("cloudrouter_host_event", default=None)
host_context_var: ContextVar[Any] = ContextVar("cloudrouter_host_context", default=None)


class HostEnvironment(Protocol):
    """Supplies the ambient event and context of the running invocation."""

    def event(self) -> Any: ...

    def context(self) -> Any: ...


class ContextVarEnvironment:
    """Reads the values bound with ``bind_host()``.

    ContextVars are task-local, so concurrent invocations on the same
    event loop each see their own event.
    """

    __slots__ = ()

    def event(self) -> Any:
        return host_event_var.get()

    def context(self) -> Any:
        return host_context_var.get()


@dataclass(frozen=True, slots=True)
class StaticEnvironment:
    """Always returns the same event and context."""

    event_value: Any = None
    context_value: Any = None

    def event(self) -> Any:
        return self.event_value

    def context(self) -> Any:
        return self.context_value


@contextmanager
def bind_host(event: Any, context: Any = None) -> Iterator[None]:
    """Expose *event* and *context* as the ambient host values.

    Host adapters wrap each invocation::

        with bind_host(raw_event, raw_context):
            result = await router.serve()
    """
    event_token = host_event_var.set(event)
    context_token = host_context_var.set(context)
    try:
        yield
    finally:
        host_context_var.reset(context_token)
        host_event_var.reset(event_token)
