"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(ctx: InvocationContext, next: Next) -> None: ...

No base class required. The router checks the shape, not the lineage.

``next()`` takes no arguments: the context is shared and mutable, so
middleware communicate by reading and writing ``ctx``. Code after
``await next()`` runs once every inner middleware and the controller
method have finished, and sees the final ``ctx.body``.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias

from cloudrouter.context import InvocationContext

# Proceed to the next entry in the chain
Next: TypeAlias = Callable[[], Awaitable[Any]]


class Middleware(Protocol):
    """Protocol for cloudrouter middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: InvocationContext, next: Next) -> None:
            start = time.monotonic()
            await next()
            ctx.state["elapsed"] = time.monotonic() - start

        # Class middleware
        class Envelope:
            async def __call__(self, ctx: InvocationContext, next: Next) -> None:
                await next()
                ctx.body = {"code": 0, "data": ctx.body}
    """

    async def __call__(self, ctx: InvocationContext, next: Next) -> Any: ...
