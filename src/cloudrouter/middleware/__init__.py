"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: InvocationContext, next: Next) -> None

Built-in middleware:
    http -- Transport decoding, always the first entry of every chain

Composition:
    MiddlewareEntry -- A registered, match-gated middleware
    compose -- Nest entries in onion order
"""

from cloudrouter.middleware.transport import http, parse_action
from cloudrouter.middleware.chain import MiddlewareEntry, compose, wrap_middleware
from cloudrouter.middleware.protocol import Middleware, Next

__all__ = [
    "Middleware",
    "MiddlewareEntry",
    "Next",
    "compose",
    "http",
    "parse_action",
    "wrap_middleware",
]
