"""HTTP helpers for URL-triggered invocations.

Headers -- Immutable, case-insensitive header mapping
decode_body -- Decode a gateway event body by content type
parse_action -- Extract the action string from a raw event
"""

from cloudrouter.http.body import decode_body
from cloudrouter.http.event import is_http_event, parse_action
from cloudrouter.http.headers import Headers

__all__ = ["Headers", "decode_body", "is_http_event", "parse_action"]
