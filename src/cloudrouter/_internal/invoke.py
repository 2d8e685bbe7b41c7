"""Invoke helpers — call sync or async callables uniformly.

Middleware, controller methods and lifecycle callbacks can be ``def`` or
``async def``. Any code that calls a user-provided callable must handle
both cases; the sync/async check lives here.

Usage::

    from cloudrouter._internal.invoke import invoke

    result = await invoke(method, ctx)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    A sync middleware that returns ``next()`` hands back a coroutine,
    which is awaited here like any async result::

        def passthrough(ctx, next):
            return next()
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def instantiate(cls: type, *args: Any) -> Any:
    """Construct *cls*, passing *args* only when its constructor takes them.

    Controller and service classes subclassing ``Controller`` / ``Service``
    receive the invocation context; a plain class with no ``__init__``
    is built with no arguments::

        class User:
            async def login(self, ctx): ...

        instantiate(User, ctx)  # -> User()
    """
    try:
        inspect.signature(cls).bind(*args)
    except TypeError:
        return cls()
    except ValueError:
        # No introspectable signature (some builtins)
        return cls()
    return cls(*args)
