"""Response normalization — the single shape ``serve()`` resolves to.

Success returns ``ctx.body`` untouched. Failure returns::

    {"code": <error.code or config.failed_code>,
     "message": <error.message or str(error)>,
     "stack": "..."}  # only when config.debug is True
"""

import traceback
from typing import Any

from cloudrouter.config import RouterConfig
from cloudrouter.context import InvocationContext


def respond(ctx: InvocationContext) -> Any:
    """Success value: whatever the chain last assigned to ``ctx.body``."""
    return ctx.body


def _stack(error: Any) -> str:
    stack = getattr(error, "stack", None)
    if stack:
        return str(stack)
    if isinstance(error, BaseException) and error.__traceback__ is not None:
        return "".join(traceback.format_exception(error))
    return ""


def failed(error: Any, config: RouterConfig) -> dict[str, Any]:
    """Failure value for *error*.

    Falsy ``code``/``message`` attributes fall back to the configured
    failure code and the error's string form. A plain string failure
    becomes its own message.
    """
    message = getattr(error, "message", None)
    if not message:
        message = error if isinstance(error, str) else str(error)
    ret: dict[str, Any] = {
        "code": getattr(error, "code", None) or config.failed_code,
        "message": message,
    }
    if config.debug is True:
        ret["stack"] = _stack(error)
    return ret
