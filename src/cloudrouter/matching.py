"""Match predicates — decide whether a middleware applies to an invocation.

``MatchOptions`` is attached to a middleware at registration time and
compiled once into a pure predicate ``(ctx) -> bool``::

    router.use(auth, MatchOptions(ignore=["public/", re.compile(r"/health$")]))
    router.use(audit, MatchOptions(match="admin/", methods=("POST",)))

Patterns:
    str -- action prefix (a leading ``/`` is ignored)
    re.Pattern -- ``search`` against the action
    callable -- ``(ctx) -> bool``
    list / tuple -- any of the above; matches if any element matches
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cloudrouter._internal.types import Predicate
from cloudrouter.errors import ConfigurationError
from cloudrouter.http.event import parse_action


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Per-middleware registration options. Immutable after creation.

    ``name`` overrides the middleware's reported name. ``enable=False``
    keeps the middleware registered but never runs it. ``match`` and
    ``ignore`` are mutually exclusive.
    """

    name: str | None = None
    enable: bool = True
    match: Any = None
    ignore: Any = None
    methods: tuple[str, ...] = ()


def _action_of(ctx: Any) -> str:
    action = getattr(ctx, "action", None)
    if action is None:
        action = parse_action(getattr(ctx, "event", None))
    return (action or "").lstrip("/")


def _to_predicate(pattern: Any) -> Predicate:
    if isinstance(pattern, str):
        prefix = pattern.lstrip("/")
        return lambda ctx: _action_of(ctx).startswith(prefix)

    if isinstance(pattern, re.Pattern):
        return lambda ctx: pattern.search(_action_of(ctx)) is not None

    if isinstance(pattern, (list, tuple)):
        predicates = [_to_predicate(p) for p in pattern]
        return lambda ctx: any(p(ctx) for p in predicates)

    if callable(pattern):
        return lambda ctx: bool(pattern(ctx))

    kind = type(pattern).__name__
    msg = f"match/ignore pattern must be str, re.Pattern, callable, list or tuple, got {kind}"
    raise ConfigurationError(msg)


def _always(ctx: Any) -> bool:
    return True


def _never(ctx: Any) -> bool:
    return False


def create_route_match(options: MatchOptions | None = None) -> Predicate:
    """Compile *options* into a predicate.

    Raises:
        ConfigurationError: If both ``match`` and ``ignore`` are set, or
            a pattern has an unsupported type.
    """
    if options is None:
        return _always
    if not options.enable:
        return _never
    if options.match is not None and options.ignore is not None:
        msg = "options.match and options.ignore can not both be present"
        raise ConfigurationError(msg)

    path_match: Callable[[Any], bool]
    if options.match is not None:
        path_match = _to_predicate(options.match)
    elif options.ignore is not None:
        ignored = _to_predicate(options.ignore)
        path_match = lambda ctx: not ignored(ctx)  # noqa: E731
    else:
        path_match = _always

    if not options.methods:
        return path_match

    methods = frozenset(m.upper() for m in options.methods)

    def method_match(ctx: Any) -> bool:
        method = getattr(ctx, "method", None)
        return method is not None and method.upper() in methods and path_match(ctx)

    return method_match
