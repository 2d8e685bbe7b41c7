"""Built-in transport middleware.

Always the first entry of every chain, including the error-only chain.
It decodes the raw event into the request-level fields of the context.

Two event shapes are understood:

Direct invocation::

    {"action": "user/login", "data": {"name": "ada"}}

URL-triggered invocation (API gateway style)::

    {
        "path": "/user/login",
        "httpMethod": "POST",
        "headers": {"content-type": "application/json"},
        "queryStringParameters": {"lang": "en"},
        "body": "{\"name\": \"ada\"}",
        "isBase64Encoded": false,
    }
"""

from collections.abc import Mapping

from cloudrouter.context import InvocationContext
from cloudrouter.http.body import decode_body
from cloudrouter.http.event import is_http_event, parse_action
from cloudrouter.http.headers import Headers
from cloudrouter.middleware.protocol import Next


async def http(ctx: InvocationContext, next: Next) -> None:
    """Populate ``ctx`` from the raw event, then continue."""
    event = ctx.event
    ctx.action = parse_action(event)

    if is_http_event(event):
        ctx.is_http = True
        ctx.method = str(event["httpMethod"]).upper()
        ctx.path = event["path"]
        ctx.headers = Headers.from_event(event.get("headers"), event.get("multiValueHeaders"))
        ctx.query = dict(event.get("queryStringParameters") or {})
        ctx.data = decode_body(
            event.get("body"),
            ctx.headers.content_type,
            is_base64=bool(event.get("isBase64Encoded")),
        )
    elif isinstance(event, Mapping):
        data = event.get("data")
        ctx.data = {} if data is None else data

    await next()
