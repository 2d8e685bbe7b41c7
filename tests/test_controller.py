"""Tests for cloudrouter.controller — action parsing and handler resolution."""

import types

import pytest

from cloudrouter.config import RouterConfig
from cloudrouter.context import create_context
from cloudrouter.controller import ActionHandler, ErrorHandler, resolve_controller, split_action
from cloudrouter.errors import ActionError
from cloudrouter.namespace import Namespace


def _ctx(event, controller=None):
    return create_context(
        RouterConfig(),
        event,
        None,
        controller=Namespace(controller),
        services=Namespace(),
    )


class Counter:
    def __init__(self, ctx) -> None:
        self.ctx = ctx

    def current(self, ctx):
        return {"same_ctx": self.ctx is ctx}


class TestSplitAction:
    def test_drops_empty_segments(self) -> None:
        assert split_action("/a//b/c/") == ["a", "b", "c"]

    def test_single(self) -> None:
        assert split_action("a") == ["a"]


class TestResolveErrors:
    def test_missing_action(self) -> None:
        handler = resolve_controller(_ctx({}))
        assert isinstance(handler, ErrorHandler)
        assert handler.name == "error"
        assert handler.message == "action is required"

    def test_empty_action(self) -> None:
        handler = resolve_controller(_ctx({"action": ""}))
        assert handler.message == "action is required"

    def test_no_slash(self) -> None:
        handler = resolve_controller(_ctx({"action": "user"}))
        assert handler.message == 'action must contain "/"'

    def test_only_slashes_and_one_segment(self) -> None:
        handler = resolve_controller(_ctx({"action": "/user/"}))
        assert handler.message == 'action must contain "/"'

    def test_namespace_not_found(self) -> None:
        handler = resolve_controller(_ctx({"action": "ns/sub/doThing"}, {"ns": {}}))
        assert handler.message == "controller/ns/sub not found"

    def test_top_level_not_found(self) -> None:
        handler = resolve_controller(_ctx({"action": "user/login"}))
        assert handler.message == "controller/user not found"

    def test_not_callable(self) -> None:
        tree = {"ns": {"sub": {"doThing": "a string"}}}
        handler = resolve_controller(_ctx({"action": "ns/sub/doThing"}, tree))
        assert handler.message == "controller/ns.sub.doThing is not a function"

    def test_missing_method(self) -> None:
        tree = {"ns": {"sub": {}}}
        handler = resolve_controller(_ctx({"action": "ns/sub/doThing"}, tree))
        assert handler.message == "controller/ns.sub.doThing is not a function"

    def test_private_method_hidden(self) -> None:
        handler = resolve_controller(_ctx({"action": "counter/__init__"}, {"counter": Counter}))
        assert handler.message == "controller/counter.__init__ is not a function"

    def test_private_namespace_hidden(self) -> None:
        tree = {"_internal": {"run": lambda ctx: 1}}
        handler = resolve_controller(_ctx({"action": "_internal/run"}, tree))
        assert handler.message == "controller/_internal not found"

    @pytest.mark.anyio
    async def test_error_handler_raises_action_error(self) -> None:
        with pytest.raises(ActionError, match="action is required") as info:
            await ErrorHandler("action is required")(_ctx({}))
        assert info.value.code is None


class TestResolveSuccess:
    @pytest.mark.anyio
    async def test_function_in_mapping(self) -> None:
        ctx = _ctx({"action": "math/double", "data": 4}, {"math": {"double": lambda c: c.data * 2}})
        handler = resolve_controller(ctx)
        assert isinstance(handler, ActionHandler)
        assert handler.name == "double"
        ctx.data = 4
        await handler(ctx)
        assert ctx.body == 8

    @pytest.mark.anyio
    async def test_class_instantiated_with_ctx(self) -> None:
        ctx = _ctx({"action": "counter/current"}, {"counter": Counter})
        handler = resolve_controller(ctx)
        assert isinstance(handler.receiver, Counter)
        assert handler.receiver.ctx is ctx
        await handler(ctx)
        assert ctx.body == {"same_ctx": True}

    @pytest.mark.anyio
    async def test_plain_class_built_without_ctx(self) -> None:
        class Plain:
            def hello(self, ctx):
                return "hi"

        ctx = _ctx({"action": "plain/hello"}, {"plain": Plain})
        handler = resolve_controller(ctx)
        assert isinstance(handler.receiver, Plain)
        await handler(ctx)
        assert ctx.body == "hi"

    @pytest.mark.anyio
    async def test_module_namespace(self) -> None:
        module = types.ModuleType("fake_controllers")

        async def ping(ctx):
            return "pong"

        module.ping = ping  # type: ignore[attr-defined]
        ctx = _ctx({"action": "health/ping"}, {"health": module})
        handler = resolve_controller(ctx)
        assert handler.receiver is module
        await handler(ctx)
        assert ctx.body == "pong"

    @pytest.mark.anyio
    async def test_receiver_shared_helpers(self) -> None:
        class Orders:
            tax = 0.5

            def total(self, ctx):
                return ctx.data["amount"] * (1 + self.tax)

        ctx = _ctx({"action": "orders/total"}, {"orders": Orders()})
        ctx.data = {"amount": 10}
        await resolve_controller(ctx)(ctx)
        assert ctx.body == 15.0

    @pytest.mark.anyio
    async def test_none_result_keeps_body(self) -> None:
        ctx = _ctx({"action": "a/b"}, {"a": {"b": lambda c: None}})
        ctx.body = "kept"
        await resolve_controller(ctx)(ctx)
        assert ctx.body == "kept"

    def test_http_path_action(self) -> None:
        event = {"path": "/a/b", "httpMethod": "GET"}
        handler = resolve_controller(_ctx(event, {"a": {"b": lambda c: 1}}))
        assert isinstance(handler, ActionHandler)
        assert handler.name == "b"
