"""Raw event inspection shared by the transport middleware and match predicates."""

from collections.abc import Mapping
from typing import Any


def is_http_event(event: Any) -> bool:
    """True if *event* came through a URL trigger."""
    return isinstance(event, Mapping) and "httpMethod" in event and "path" in event


def parse_action(event: Any) -> str | None:
    """Extract the action string from a raw event.

    ``event["action"]`` wins; URL-triggered events fall back to their
    path with surrounding slashes removed. Returns ``None`` when the
    event carries neither.
    """
    if not isinstance(event, Mapping):
        return None
    action = event.get("action")
    if isinstance(action, str) and action:
        return action
    if is_http_event(event):
        path = event.get("path")
        if isinstance(path, str):
            return path.strip("/") or None
    return None
