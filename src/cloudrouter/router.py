"""The dispatcher — one ``serve()`` call per function invocation.

Mutable during setup (middleware registration, lifecycle callbacks).
Every invocation reads only the frozen config and the middleware tuple
it started with, so concurrent ``serve()`` calls share no mutable state.

Per invocation::

    INIT      build a fresh InvocationContext
    RESOLVE   action -> ActionHandler | ErrorHandler
    CHAIN     ErrorHandler: transport entry + error handler only
              ActionHandler: every entry, handler innermost
    RESPOND   ctx.body
    FAILED    normalized {code, message[, stack]}
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

import anyio

from cloudrouter.config import RouterConfig
from cloudrouter.context import InvocationContext, context_var, create_context
from cloudrouter.controller import ErrorHandler, resolve_controller
from cloudrouter.environment import ContextVarEnvironment, HostEnvironment
from cloudrouter.errors import ActionError, ConfigurationError
from cloudrouter.events import ERROR, REQUEST, RESPONSE, LifecycleEvents
from cloudrouter.http.event import parse_action
from cloudrouter.matching import MatchOptions
from cloudrouter.middleware.chain import MiddlewareEntry, compose, wrap_middleware
from cloudrouter.middleware.transport import http
from cloudrouter.namespace import Namespace
from cloudrouter.response import failed, respond

logger = logging.getLogger("cloudrouter.router")


class Router:
    """Routes invocations to controller methods through a middleware chain.

    Usage::

        router = Router(
            RouterConfig(debug=True, middleware=((auth, MatchOptions(ignore="public/")),)),
            controller={"user": User, "public": public_module},
            service={"account": AccountService},
        )
        router.use(timing)

        async def main(event, context):
            return await router.serve(event, context)
    """

    __slots__ = ("_events", "_middleware", "config", "controller", "environment", "services")

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        controller: Any = None,
        service: Any = None,
        environment: HostEnvironment | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.controller = Namespace(controller)
        self.services = Namespace(service)
        self.environment: HostEnvironment = environment or ContextVarEnvironment()
        self._events = LifecycleEvents()
        self._middleware: tuple[MiddlewareEntry, ...] = ()
        self._init_middleware()

    # -- Setup --

    def _init_middleware(self) -> None:
        self.use(http, MatchOptions(name="http"))
        for item in self.config.middleware:
            if isinstance(item, tuple):
                if len(item) != 2:
                    msg = f"config middleware must be fn or (fn, options), got a tuple of {len(item)}"
                    raise ConfigurationError(msg)
                self.use(*item)
            else:
                self.use(item)

    def use(
        self,
        fn: Callable[..., Any],
        options: MatchOptions | Mapping[str, Any] | None = None,
    ) -> "Router":
        """Append middleware *fn*, gated by *options*. Returns the router.

        Raises:
            TypeError: If *fn* is not callable.
            ConfigurationError: If *options* are invalid.
        """
        entry = wrap_middleware(fn, options)
        self._middleware = (*self._middleware, entry)
        return self

    register = use

    @property
    def middleware(self) -> tuple[MiddlewareEntry, ...]:
        """Registered entries in execution order, transport first."""
        return self._middleware

    def on(self, name: str, callback: Callable[..., Any]) -> "Router":
        """Subscribe *callback* to lifecycle event *name*. Returns the router."""
        self._events.subscribe(name, callback)
        return self

    def off(self, name: str, callback: Callable[..., Any]) -> "Router":
        """Unsubscribe *callback* from lifecycle event *name*. Returns the router."""
        self._events.unsubscribe(name, callback)
        return self

    # -- Dispatch --

    async def serve(self, event: Any = None, context: Any = None) -> Any:
        """Dispatch one invocation. Never raises for failures inside the chain.

        Omitted *event* / *context* are taken from the host environment.
        """
        if event is None:
            event = self.environment.event()
        if context is None:
            context = self.environment.context()

        ctx = create_context(
            self.config,
            event,
            context,
            controller=self.controller,
            services=self.services,
        )
        token = context_var.set(ctx)
        try:
            await self._events.emit(REQUEST, ctx)
            try:
                await self._run(ctx)
            except Exception as exc:
                self._log_failure(ctx, exc)
                await self._events.emit(ERROR, ctx, exc)
                return failed(exc, self.config)

            value = respond(ctx)
            await self._events.emit(RESPONSE, ctx, value)
            return value
        finally:
            context_var.reset(token)

    async def _run(self, ctx: InvocationContext) -> None:
        middleware = self._middleware
        handler = resolve_controller(ctx)
        if isinstance(handler, ErrorHandler):
            chain = compose((middleware[0], handler))
        else:
            logger.debug(
                "dispatching %r to %s.%s",
                parse_action(ctx.event),
                type(handler.receiver).__name__,
                handler.name,
            )
            chain = compose((*middleware, handler))
        await chain(ctx)

    def _log_failure(self, ctx: InvocationContext, exc: Exception) -> None:
        action = ctx.action or parse_action(ctx.event) or "-"
        if isinstance(exc, ActionError):
            logger.debug("unroutable action %r: %s", action, exc.message)
        elif hasattr(exc, "code"):
            logger.debug("action %r failed with code %r: %s", action, exc.code, exc)
        else:
            logger.exception("action %r raised", action)

    def handle(self, event: Any = None, context: Any = None) -> Any:
        """Synchronous entry point for hosts that call plain functions.

        Runs ``serve()`` on a fresh event loop; do not call from inside
        a running loop.
        """
        return anyio.run(self.serve, event, context)

    def entry(self, *, sync: bool = False) -> Callable[..., Any]:
        """Build the host entry point for this router.

        The returned ``main(event, context)`` serves through ``serve()``
        (or ``handle()`` when *sync*) and keeps a ``router`` attribute,
        which is how ``cloudrouter invoke`` finds the router behind a
        deployed function::

            main = router.entry()
        """
        if sync:

            def main(event: Any = None, context: Any = None) -> Any:
                return self.handle(event, context)

        else:

            async def main(event: Any = None, context: Any = None) -> Any:
                return await self.serve(event, context)

        main.router = self  # type: ignore[attr-defined]
        return main

    def describe(self) -> dict[str, Any]:
        """Middleware names in order, every routable action and the handler roots."""
        return {
            "controller_path": str(self.config.controller_path),
            "service_path": str(self.config.service_path),
            "middleware": [entry.name for entry in self._middleware],
            "actions": list(self.controller.actions()),
        }

    def __repr__(self) -> str:
        names = ", ".join(entry.name for entry in self._middleware)
        return f"<Router middleware=[{names}] debug={self.config.debug}>"

