"""Test helpers for cloudrouter applications.

Builds the same raw events a function host delivers, so tests go
through the real transport middleware. No host required::

    result = await router.serve(make_event("user/login", {"name": "ada"}))
    assert_failure(result, 'action must contain "/"')
"""

import base64
import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from cloudrouter.config import FAILED_CODE


def make_event(action: str | None, data: Any = None, **extra: Any) -> dict[str, Any]:
    """A direct-invocation event: ``{"action": ..., "data": ...}``."""
    event: dict[str, Any] = {}
    if action is not None:
        event["action"] = action
    if data is not None:
        event["data"] = data
    event.update(extra)
    return event


def make_http_event(
    path: str,
    *,
    method: str = "GET",
    json_body: Any = None,
    form: Mapping[str, Any] | None = None,
    body: str | None = None,
    headers: Mapping[str, str] | None = None,
    query: Mapping[str, str] | None = None,
    base64_encode: bool = False,
) -> dict[str, Any]:
    """A URL-triggered event, as an API gateway would deliver it.

    ``json_body`` and ``form`` set a matching ``content-type`` header
    unless one is given explicitly.
    """
    all_headers = dict(headers or {})
    lowered = {name.lower() for name in all_headers}
    if json_body is not None:
        body = json.dumps(json_body)
        if "content-type" not in lowered:
            all_headers["content-type"] = "application/json"
    elif form is not None:
        body = urlencode(form, doseq=True)
        if "content-type" not in lowered:
            all_headers["content-type"] = "application/x-www-form-urlencoded"

    if body is not None and base64_encode:
        body = base64.b64encode(body.encode("utf-8")).decode("ascii")

    return {
        "path": path,
        "httpMethod": method,
        "headers": all_headers,
        "queryStringParameters": dict(query) if query else None,
        "body": body,
        "isBase64Encoded": base64_encode,
    }


def assert_failure(result: Any, message: str, *, code: Any = FAILED_CODE) -> None:
    """Assert *result* is a normalized failure with *message* and *code*."""
    assert isinstance(result, dict), f"Expected a failure dict, got {result!r}"
    assert result.get("message") == message, (
        f"Expected message {message!r}, got {result.get('message')!r}"
    )
    assert result.get("code") == code, f"Expected code {code!r}, got {result.get('code')!r}"
