"""Tests for cloudrouter.errors — exception hierarchy and string forms."""

from cloudrouter.errors import (
    ActionError,
    ConfigurationError,
    InvocationError,
    RequestDecodeError,
    RouterError,
)


class TestHierarchy:
    def test_all_router_errors(self) -> None:
        for cls in (ConfigurationError, InvocationError, ActionError, RequestDecodeError):
            assert issubclass(cls, RouterError)

    def test_action_error_is_invocation_error(self) -> None:
        assert issubclass(ActionError, InvocationError)


class TestInvocationError:
    def test_attributes(self) -> None:
        exc = InvocationError(404, "missing")
        assert exc.code == 404
        assert exc.message == "missing"

    def test_str(self) -> None:
        assert str(InvocationError(404, "missing")) == "404: missing"
        assert str(InvocationError("E1")) == "E1"


class TestActionError:
    def test_default_code_is_none(self) -> None:
        exc = ActionError("action is required")
        assert exc.code is None
        assert str(exc) == "action is required"

    def test_explicit_code(self) -> None:
        assert ActionError("x", code="ROUTE").code == "ROUTE"


class TestRequestDecodeError:
    def test_code(self) -> None:
        exc = RequestDecodeError("invalid JSON body: oops")
        assert exc.code == "INVALID_BODY"
        assert exc.message == "invalid JSON body: oops"
