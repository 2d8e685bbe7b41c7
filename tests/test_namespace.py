"""Tests for cloudrouter.namespace — typed lookup over handler trees."""

import types

import pytest

from cloudrouter.namespace import MISSING, Lookup, Namespace, child


class Users:
    label = "users"

    def find(self, ctx):
        return None

    def _hidden(self, ctx):
        return None


class TestChild:
    def test_mapping(self) -> None:
        assert child({"a": 1}, "a") == 1

    def test_attribute(self) -> None:
        assert child(Users, "label") == "users"

    def test_missing(self) -> None:
        assert child({}, "a") is MISSING
        assert child(Users, "nope") is MISSING

    def test_none_counts_as_missing(self) -> None:
        assert child({"a": None}, "a") is MISSING

    def test_private(self) -> None:
        assert child(Users, "_hidden") is MISSING
        assert child({"_x": 1}, "_x") is MISSING

    def test_through_namespace(self) -> None:
        assert child(Namespace({"a": 1}), "a") == 1


class TestLookup:
    def test_found(self) -> None:
        ns = Namespace({"a": {"b": Users}})
        result = ns.lookup(["a", "b"])
        assert result == Lookup(node=Users, depth=2)
        assert result.found

    def test_missing_segment(self) -> None:
        tree = {"a": {"b": Users}}
        result = Namespace(tree).lookup(["a", "x", "y"])
        assert not result.found
        assert result.missing == "x"
        assert result.depth == 1
        assert result.node is tree["a"]

    def test_empty_path_is_root(self) -> None:
        tree = {"a": 1}
        assert Namespace(tree).lookup([]).node is tree

    def test_resolve(self) -> None:
        assert Namespace({"a": {"b": 2}}).resolve("/a/b") == 2

    def test_resolve_missing(self) -> None:
        with pytest.raises(LookupError, match="no segment 'c'"):
            Namespace({"a": {}}).resolve("a/c")


class TestMount:
    def test_mount_nested(self) -> None:
        ns = Namespace()
        ns.mount("admin/users", Users)
        assert ns.lookup(["admin", "users"]).node is Users

    def test_mount_requires_segment(self) -> None:
        with pytest.raises(ValueError):
            Namespace().mount("/", Users)

    def test_mount_into_non_mapping(self) -> None:
        ns = Namespace({"a": Users})
        with pytest.raises(TypeError, match="not a mapping"):
            ns.mount("a/b", 1)


class TestAccess:
    def test_attribute_chain(self) -> None:
        ns = Namespace({"a": {"b": Users}})
        assert ns.a.b is Users

    def test_item(self) -> None:
        ns = Namespace({"a": 1})
        assert ns["a"] == 1
        with pytest.raises(KeyError):
            ns["b"]

    def test_attribute_missing(self) -> None:
        with pytest.raises(AttributeError, match="no member 'b'"):
            Namespace({}).b

    def test_contains(self) -> None:
        ns = Namespace({"a": 1})
        assert "a" in ns
        assert "b" not in ns
        assert 1 not in ns

    def test_wraps_namespace(self) -> None:
        inner = Namespace({"a": 1})
        assert Namespace(inner).root is inner.root


class TestActions:
    def test_lists_callables(self) -> None:
        ns = Namespace({"users": Users, "math": {"add": lambda c: 1, "pi": 3.14}, "top": len})
        assert list(ns.actions()) == ["math/add", "users/find"]

    def test_module_only_own_members(self) -> None:
        module = types.ModuleType("fake_health")

        def ping(ctx):
            return "pong"

        ping.__module__ = "fake_health"
        module.ping = ping  # type: ignore[attr-defined]
        module.types = types  # type: ignore[attr-defined]
        assert list(Namespace({"health": module}).actions()) == ["health/ping"]

    def test_instance_methods(self) -> None:
        assert list(Namespace({"users": Users()}).actions()) == ["users/find"]

    def test_cycle_safe(self) -> None:
        tree: dict = {"a": {}}
        tree["a"]["loop"] = tree
        tree["a"]["go"] = lambda c: 1
        assert "a/go" in list(Namespace(tree).actions())
