"""Body decoding for URL-triggered events.

Gateways deliver the request body as a string, base64-encoded when
``isBase64Encoded`` is set. The media type picks the decoder:

- ``application/json`` (and ``+json`` suffixes) -> parsed JSON
- ``application/x-www-form-urlencoded`` -> dict, repeated keys become lists
- anything else -> text, left as-is
"""

import base64
import binascii
import json
from typing import Any
from urllib.parse import parse_qs

from cloudrouter.errors import RequestDecodeError

FORM_TYPE = "application/x-www-form-urlencoded"


def _is_json(content_type: str) -> bool:
    return content_type == "application/json" or content_type.endswith("+json")


def decode_body(body: Any, content_type: str, *, is_base64: bool = False) -> Any:
    """Decode an event body according to *content_type*.

    Non-string bodies (already-decoded payloads from test harnesses or
    direct invocations) are returned untouched. An empty body decodes
    to an empty dict.

    Raises:
        RequestDecodeError: If the base64 wrapper or the JSON payload
            is malformed.
    """
    if body is None:
        return {}
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not isinstance(body, str):
        return body

    if is_base64:
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError) as exc:
            msg = f"invalid base64 body: {exc}"
            raise RequestDecodeError(msg) from exc

    if not body:
        return {}

    if _is_json(content_type):
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            msg = f"invalid JSON body: {exc.msg}"
            raise RequestDecodeError(msg) from exc

    if content_type == FORM_TYPE:
        parsed = parse_qs(body, keep_blank_values=True)
        return {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}

    return body
