"""Controller resolution — from an action string to a callable handler.

An action is ``namespace/.../method``. The namespace segments are walked
through the controller tree; the last segment names the method::

    "user/profile/update"  ->  controller.user.profile.update(ctx)

Resolution never raises for a bad action. It returns an ``ErrorHandler``
instead, and the router runs that in the error-only chain so the
failure is reported through the normal response path.
"""

import re
from dataclasses import dataclass
from typing import Any

from cloudrouter._internal.invoke import instantiate, invoke
from cloudrouter._internal.types import Method
from cloudrouter.context import InvocationContext
from cloudrouter.errors import ActionError
from cloudrouter.http.event import parse_action
from cloudrouter.namespace import MISSING, child

ERROR_HANDLER_NAME = "error"


@dataclass(frozen=True, slots=True)
class ErrorHandler:
    """Stand-in handler for an action that can not be routed.

    Running it raises ``ActionError`` with the routing message.
    """

    message: str
    name: str = ERROR_HANDLER_NAME

    async def __call__(self, ctx: InvocationContext, next: Any = None) -> None:
        raise ActionError(self.message)


@dataclass(frozen=True, slots=True)
class ActionHandler:
    """The innermost step of a chain: calls one controller method.

    ``method`` is already bound to its namespace node when that node is
    a class instance; ``receiver`` records the node for introspection
    and dispatch logging only. A non-``None`` return value becomes
    ``ctx.body``.
    """

    name: str
    method: Method
    receiver: Any = None

    async def __call__(self, ctx: InvocationContext, next: Any = None) -> None:
        result = await invoke(self.method, ctx)
        if result is not None:
            ctx.body = result


def split_action(action: str) -> list[str]:
    """Split *action* on ``/``, dropping empty segments."""
    return [segment for segment in action.split("/") if segment]


def _namespace_path(action: str, method_name: str) -> str:
    """*action* without its trailing ``/<method_name>``."""
    return re.sub("/" + re.escape(method_name) + "$", "", action.rstrip("/"))


def resolve_controller(ctx: InvocationContext) -> ActionHandler | ErrorHandler:
    """Resolve the action of *ctx.event* against ``ctx.controller``.

    Failure messages are part of the public contract; callers match on
    them:

    - ``action is required``
    - ``action must contain "/"``
    - ``controller/<namespace> not found``
    - ``controller/<namespace.method> is not a function``

    A class found at the end of the namespace path is instantiated (with
    *ctx* when its constructor takes an argument), and the method is
    looked up on that instance.
    """
    action = parse_action(ctx.event)
    if not action:
        return ErrorHandler("action is required")

    segments = split_action(action)
    if len(segments) == 1:
        return ErrorHandler('action must contain "/"')

    method_name = segments[-1]
    found = ctx.controller.lookup(segments[:-1])
    if not found.found:
        return ErrorHandler(f"controller/{_namespace_path(action, method_name)} not found")

    node = found.node
    method = child(node, method_name)
    if method is MISSING or not callable(method):
        dotted = _namespace_path(action, method_name).replace("/", ".") + "." + method_name
        return ErrorHandler(f"controller/{dotted} is not a function")

    if isinstance(node, type):
        node = instantiate(node, ctx)
        method = getattr(node, method_name)

    return ActionHandler(name=method_name, method=method, receiver=node)
