"""Handler namespace — the tree an action path is resolved against.

A namespace is any nesting of mappings, modules, classes and plain
objects. Mappings are walked by key, everything else by attribute::

    controller = Namespace({
        "user": UserController,        # class, instantiated per invocation
        "admin": {"stats": stats_mod},  # nested mapping + module
    })
    controller.lookup(["admin", "stats"]).node is stats_mod

Lookups return a ``Lookup`` value instead of raising, so callers can
tell exactly which segment was missing. Names starting with ``_`` are
never resolved; an action can not reach private helpers or dunders.
"""

import inspect
import types
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Final

MISSING: Final = object()

# Guard against reference cycles when listing actions
_MAX_DEPTH = 16


def child(node: Any, name: str) -> Any:
    """Return the child *name* of *node*, or ``MISSING``.

    ``None`` values count as missing, the same as absent keys.
    """
    if not name or name.startswith("_"):
        return MISSING
    if isinstance(node, Namespace):
        node = node.root
    if isinstance(node, Mapping):
        value = node.get(name, MISSING)
    else:
        try:
            value = getattr(node, name)
        except AttributeError:
            return MISSING
    return MISSING if value is None else value


@dataclass(frozen=True, slots=True)
class Lookup:
    """Result of walking a namespace path.

    ``missing`` is the first segment that could not be resolved, or
    ``None`` on success. ``node`` is the last node reached.
    """

    node: Any
    missing: str | None = None
    depth: int = 0

    @property
    def found(self) -> bool:
        return self.missing is None


class Namespace:
    """A read-only view over a tree of handler objects.

    Attribute and item access return child nodes; mapping children come
    back wrapped so lookups chain (``ns.user.find``).
    """

    __slots__ = ("_root",)

    def __init__(self, root: Any = None) -> None:
        if isinstance(root, Namespace):
            root = root.root
        self._root = {} if root is None else root

    @property
    def root(self) -> Any:
        return self._root

    def lookup(self, segments: Iterable[str]) -> Lookup:
        """Walk *segments* from the root, one child lookup per segment."""
        node = self._root
        depth = 0
        for segment in segments:
            value = child(node, segment)
            if value is MISSING:
                return Lookup(node=node, missing=segment, depth=depth)
            node = value
            depth += 1
        return Lookup(node=node, depth=depth)

    def resolve(self, path: str) -> Any:
        """Return the node at slash-separated *path*.

        Raises ``LookupError`` naming the first missing segment.
        """
        result = self.lookup(p for p in path.split("/") if p)
        if not result.found:
            msg = f"{path!r}: no segment {result.missing!r}"
            raise LookupError(msg)
        return result.node

    def mount(self, path: str, node: Any) -> None:
        """Attach *node* under slash-separated *path*.

        Intermediate mappings are created as needed. Only namespaces
        whose root is a mutable mapping can be mounted into, and only
        during setup.
        """
        segments = [p for p in path.split("/") if p]
        if not segments:
            msg = "mount path must contain at least one segment"
            raise ValueError(msg)
        target = self._root
        for segment in segments[:-1]:
            if not isinstance(target, MutableMapping):
                msg = f"cannot mount {path!r}: {segment!r} is not a mapping"
                raise TypeError(msg)
            target = target.setdefault(segment, {})
        if not isinstance(target, MutableMapping):
            msg = f"cannot mount {path!r}: parent is not a mapping"
            raise TypeError(msg)
        target[segments[-1]] = node

    def actions(self) -> Iterator[str]:
        """Yield every ``namespace/.../method`` path that resolves to a callable.

        Classes are treated as namespaces (their public functions are the
        methods); modules only contribute names they define themselves.
        """
        yield from _walk(self._root, (), set())

    def __getattr__(self, name: str) -> Any:
        value = child(self._root, name)
        if value is MISSING:
            msg = f"namespace has no member {name!r}"
            raise AttributeError(msg)
        return Namespace(value) if isinstance(value, Mapping) else value

    def __getitem__(self, name: str) -> Any:
        value = child(self._root, name)
        if value is MISSING:
            raise KeyError(name)
        return Namespace(value) if isinstance(value, Mapping) else value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and child(self._root, name) is not MISSING

    def __repr__(self) -> str:
        return f"Namespace({self._root!r})"


def _members(node: Any) -> Iterator[tuple[str, Any]]:
    """Public members of *node* that are worth descending into."""
    if isinstance(node, Mapping):
        for name, value in node.items():
            if isinstance(name, str) and not name.startswith("_") and value is not None:
                yield name, value
        return

    if isinstance(node, types.ModuleType):
        prefix = node.__name__ + "."
        for name, value in vars(node).items():
            if name.startswith("_"):
                continue
            if isinstance(value, types.ModuleType):
                if value.__name__.startswith(prefix):
                    yield name, value
            elif getattr(value, "__module__", None) == node.__name__:
                yield name, value
        return

    owner = node if isinstance(node, type) else type(node)
    for name, value in inspect.getmembers(owner):
        if name.startswith("_"):
            continue
        if inspect.isfunction(value) or inspect.ismethod(value) or isinstance(value, type):
            yield name, value


def _is_container(node: Any) -> bool:
    return isinstance(node, (Mapping, types.ModuleType, type)) or not callable(node)


def _walk(node: Any, prefix: tuple[str, ...], seen: set[int]) -> Iterator[str]:
    if len(prefix) > _MAX_DEPTH or id(node) in seen:
        return
    seen = seen | {id(node)}
    for name, value in sorted(_members(node), key=lambda item: item[0]):
        path = (*prefix, name)
        if _is_container(value):
            yield from _walk(value, path, seen)
        elif len(path) >= 2:
            yield "/".join(path)
