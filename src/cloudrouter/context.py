"""Invocation context and request-scoped access to it.

Provides:
- ``InvocationContext``: the object every middleware and controller
  method receives. One per invocation, never shared.
- ``create_context``: builds a fresh context for ``Router.serve()``.
- ``context_var`` / ``get_context``: the context of the running
  invocation, for helpers that are not handed ``ctx`` explicitly.

Thread safety:
    ``ContextVar`` is task-local under asyncio, so concurrent
    invocations on one event loop never see each other's context.
"""

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, NoReturn

from cloudrouter._internal.invoke import instantiate
from cloudrouter.config import RouterConfig
from cloudrouter.errors import InvocationError
from cloudrouter.http.headers import Headers
from cloudrouter.namespace import MISSING, Namespace, child


class ServiceAccessor:
    """Per-invocation view of the service namespace.

    Classes found in the namespace are instantiated on first access
    (with the invocation context when their constructor takes it) and
    cached for the rest of the invocation::

        class UserService(Service):
            async def find(self, uid): ...

        # in a controller method
        user = await ctx.service.user.find(uid)
    """

    __slots__ = ("_cache", "_ctx", "_namespace")

    def __init__(self, ctx: "InvocationContext", namespace: Namespace) -> None:
        self._ctx = ctx
        self._namespace = namespace
        self._cache: dict[str, Any] = {}

    def __getattr__(self, name: str) -> Any:
        try:
            return self._cache[name]
        except KeyError:
            pass
        value = child(self._namespace, name)
        if value is MISSING:
            msg = f"service {name!r} not found"
            raise AttributeError(msg)
        if isinstance(value, type):
            value = instantiate(value, self._ctx)
        elif isinstance(value, Mapping):
            value = ServiceAccessor(self._ctx, Namespace(value))
        self._cache[name] = value
        return value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._namespace

    def __repr__(self) -> str:
        return f"<ServiceAccessor cached={sorted(self._cache)!r}>"


@dataclass(slots=True, eq=False)
class InvocationContext:
    """Everything one invocation reads and writes.

    ``body`` is the result slot: whatever it holds when the chain
    completes is what ``serve()`` returns. ``state`` is free-form
    storage for middleware. The transport middleware fills ``action``,
    ``data``, ``query``, ``headers``, ``method``, ``path`` and
    ``is_http`` before any user middleware runs.
    """

    config: RouterConfig
    event: Any
    context: Any
    controller: Namespace
    service: ServiceAccessor = field(init=False)
    services: Namespace = field(default_factory=Namespace, repr=False)
    state: dict[str, Any] = field(default_factory=dict)
    body: Any = None

    action: str | None = None
    data: Any = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Headers = field(default_factory=Headers)
    method: str | None = None
    path: str | None = None
    is_http: bool = False

    def __post_init__(self) -> None:
        self.service = ServiceAccessor(self, self.services)

    @property
    def debug(self) -> bool:
        return self.config.debug

    def throw(self, code: Any, message: str = "") -> NoReturn:
        """Abort the invocation with a coded failure.

        ``serve()`` resolves to ``{"code": code, "message": message}``.
        """
        raise InvocationError(code, message)


def create_context(
    config: RouterConfig,
    event: Any,
    context: Any,
    *,
    controller: Namespace,
    services: Namespace,
) -> InvocationContext:
    """Build a fresh context for one invocation.

    A missing event becomes an empty dict so transport parsing and
    match predicates never see ``None``.
    """
    return InvocationContext(
        config=config,
        event={} if event is None else event,
        context=context,
        controller=controller,
        services=services,
    )


# -- Request context --

context_var: ContextVar[InvocationContext] = ContextVar("cloudrouter_context")
"""The current invocation context. Set by ``Router.serve()`` during dispatch."""


def get_context() -> InvocationContext:
    """Return the context of the running invocation.

    Raises ``LookupError`` if called outside ``Router.serve()``.
    """
    return context_var.get()
