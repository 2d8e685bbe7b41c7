"""Middleware chain — match-gated entries composed in onion order.

``wrap_middleware`` turns a registered callable into a ``MiddlewareEntry``
that consults its match predicate on every invocation. ``compose`` nests
a sequence of entries so earlier ones wrap later ones::

    chain = compose([outer, inner, handler])
    await chain(ctx)

    # outer before -> inner before -> handler -> inner after -> outer after
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from cloudrouter._internal.invoke import invoke
from cloudrouter._internal.types import Predicate
from cloudrouter.context import InvocationContext
from cloudrouter.matching import MatchOptions, create_route_match


def _always(ctx: Any) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class MiddlewareEntry:
    """A registered middleware.

    Calling the entry runs ``fn`` only when ``predicate(ctx)`` holds;
    otherwise it passes straight through to ``next``. Entries are
    immutable and shared by every concurrent invocation.
    """

    fn: Callable[..., Any]
    name: str
    options: MatchOptions | None = None
    predicate: Predicate = field(default=_always, repr=False, compare=False)

    async def __call__(self, ctx: InvocationContext, next: Callable[[], Awaitable[Any]]) -> Any:
        if not self.predicate(ctx):
            return await next()
        return await invoke(self.fn, ctx, next)


def middleware_name(fn: Any, options: MatchOptions | None = None) -> str:
    """Reported name: explicit option, ``_name`` tag, ``__name__``, class name."""
    if options is not None and options.name:
        return options.name
    tagged = getattr(fn, "_name", None)
    if isinstance(tagged, str) and tagged:
        return tagged
    name = getattr(fn, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return type(fn).__name__


def wrap_middleware(
    fn: Any,
    options: MatchOptions | Mapping[str, Any] | None = None,
) -> MiddlewareEntry:
    """Wrap *fn* in a match-gated ``MiddlewareEntry``.

    *options* may be a ``MatchOptions`` or a plain mapping of its fields.

    Raises:
        TypeError: If *fn* is not callable.
        ConfigurationError: If *options* can not be compiled.
    """
    if not callable(fn):
        msg = "middleware must be a callable"
        raise TypeError(msg)
    if isinstance(options, Mapping):
        options = MatchOptions(**options)
    return MiddlewareEntry(
        fn=fn,
        name=middleware_name(fn, options),
        options=options,
        predicate=create_route_match(options),
    )


def compose(
    middleware: Sequence[Callable[..., Any]],
) -> Callable[[InvocationContext], Awaitable[None]]:
    """Compose *middleware* into a single async callable.

    Each step receives ``(ctx, next)``. ``next()`` runs the rest of the
    chain and may be awaited at most once per step.

    Raises:
        TypeError: If any element is not callable.
    """
    stack = tuple(middleware)
    for fn in stack:
        if not callable(fn):
            msg = "middleware must be composed of callables"
            raise TypeError(msg)

    async def run(ctx: InvocationContext) -> None:
        index = -1

        async def dispatch(i: int) -> Any:
            nonlocal index
            if i <= index:
                msg = "next() called multiple times"
                raise RuntimeError(msg)
            index = i
            if i == len(stack):
                return None

            async def next() -> Any:
                return await dispatch(i + 1)

            return await invoke(stack[i], ctx, next)

        await dispatch(0)

    return run
