"""cloudrouter exception hierarchy.

Shared across the router, resolver, transport and middleware so every
module raises and catches the same types.
"""

from typing import Any


class RouterError(Exception):
    """Base for all cloudrouter-specific errors."""


class ConfigurationError(RouterError):
    """Raised when router configuration is invalid.

    Typically raised by ``Router.use()`` at setup time and never caught
    by the dispatcher.
    """


class InvocationError(RouterError):
    """A failure carrying its own ``code`` and ``message``.

    Raised by handlers and middleware (usually through ``ctx.throw()``).
    The normalizer copies both attributes into the failure response::

        raise InvocationError(403, "permission denied")
        # -> {"code": 403, "message": "permission denied"}
    """

    def __init__(self, code: Any, message: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        if self.message:
            return f"{self.code}: {self.message}"
        return str(self.code)


class ActionError(InvocationError):
    """The action could not be routed to a handler.

    Raised inside the error-only chain for a missing action, an action
    without ``/``, an unknown namespace, or a method that is not callable.
    ``code`` stays ``None`` so the response carries the router's
    configured failure code.
    """

    def __init__(self, message: str, code: Any = None) -> None:
        super().__init__(code, message)


class RequestDecodeError(InvocationError):
    """The body of a URL-triggered event could not be decoded."""

    def __init__(self, message: str) -> None:
        super().__init__("INVALID_BODY", message)
