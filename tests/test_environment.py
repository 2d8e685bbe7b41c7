"""Tests for cloudrouter.environment — ambient host event/context."""

import pytest

from cloudrouter.environment import ContextVarEnvironment, StaticEnvironment, bind_host
from cloudrouter.router import Router
from cloudrouter.testing import make_event


class TestStaticEnvironment:
    def test_values(self) -> None:
        env = StaticEnvironment({"action": "a/b"}, "ctx")
        assert env.event() == {"action": "a/b"}
        assert env.context() == "ctx"

    def test_defaults(self) -> None:
        env = StaticEnvironment()
        assert env.event() is None
        assert env.context() is None


class TestContextVarEnvironment:
    def test_unbound(self) -> None:
        env = ContextVarEnvironment()
        assert env.event() is None
        assert env.context() is None

    def test_bind_and_reset(self) -> None:
        env = ContextVarEnvironment()
        with bind_host({"action": "x/y"}, {"request_id": "r1"}):
            assert env.event() == {"action": "x/y"}
            assert env.context() == {"request_id": "r1"}
        assert env.event() is None

    @pytest.mark.anyio
    async def test_router_default_environment(self) -> None:
        router = Router(controller={"x": {"y": lambda ctx: ctx.context["request_id"]}})
        with bind_host(make_event("x/y"), {"request_id": "r1"}):
            assert await router.serve() == "r1"
