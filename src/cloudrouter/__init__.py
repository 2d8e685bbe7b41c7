"""cloudrouter — action routing and middleware for function-as-a-service handlers.

One entry point per cloud function, many actions behind it. Each
invocation names an action (``"user/login"``); the router runs the
registered middleware around the matching controller method and hands
back either the method's result or a normalized failure.

Basic usage::

    from cloudrouter import Router

    class User:
        async def login(self, ctx):
            return {"token": await issue_token(ctx.data)}

    router = Router(controller={"user": User})

    async def main(event, context):
        return await router.serve(event, context)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ActionError",
    "ConfigurationError",
    "Controller",
    "FAILED_CODE",
    "InvocationContext",
    "InvocationError",
    "MatchOptions",
    "Middleware",
    "Namespace",
    "Next",
    "Router",
    "RouterConfig",
    "RouterError",
    "Service",
    "get_context",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import cloudrouter`` fast on cold starts while providing a
    clean top-level API.
    """
    if name == "Router":
        from cloudrouter.router import Router

        return Router

    if name in ("RouterConfig", "FAILED_CODE"):
        from cloudrouter import config as _config

        return getattr(_config, name)

    if name in ("InvocationContext", "get_context"):
        from cloudrouter import context as _ctx

        return getattr(_ctx, name)

    if name in ("Controller", "Service"):
        from cloudrouter import base as _base

        return getattr(_base, name)

    if name == "MatchOptions":
        from cloudrouter.matching import MatchOptions

        return MatchOptions

    if name in ("Middleware", "Next"):
        from cloudrouter.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "Namespace":
        from cloudrouter.namespace import Namespace

        return Namespace

    if name in ("ActionError", "ConfigurationError", "InvocationError", "RouterError"):
        from cloudrouter import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
