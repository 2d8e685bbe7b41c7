"""Shared type aliases used across cloudrouter modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Controller method: receives the invocation context, returns the body
Method: TypeAlias = Callable[..., Any]

# Match predicate: pure function of the invocation context
Predicate: TypeAlias = Callable[[Any], bool]

# Lifecycle callback: sync or async, arguments depend on the event
Listener: TypeAlias = Callable[..., Any | Awaitable[Any]]
