"""Base classes for controllers and services.

Subclassing is optional: any object in the handler namespace works.
A class in the namespace is instantiated for every invocation that
routes to it, so instance state never leaks between requests. Subclasses
of ``Controller`` and ``Service`` are handed the invocation context; a
plain class without an ``__init__`` is built with no arguments::

    class User(Controller):
        async def login(self, ctx):
            account = await self.service.account.verify(ctx.data)
            return {"token": account.token}

    router = Router(controller={"user": User})
"""

from cloudrouter.config import RouterConfig
from cloudrouter.context import InvocationContext, ServiceAccessor


class _Bound:
    __slots__ = ("ctx",)

    def __init__(self, ctx: InvocationContext) -> None:
        self.ctx = ctx

    @property
    def config(self) -> RouterConfig:
        return self.ctx.config

    @property
    def service(self) -> ServiceAccessor:
        return self.ctx.service


class Controller(_Bound):
    """Base class for controllers. Methods receive ``ctx`` as their only argument."""

    __slots__ = ()


class Service(_Bound):
    """Base class for services reached through ``ctx.service``."""

    __slots__ = ()
