"""Notes — a cloud function serving a small note store.

Demonstrates controllers, services, gated middleware and ``ctx.throw``::

    cloudrouter invoke examples/notes/app.py health/ping
    cloudrouter actions examples/notes/app.py:main
"""

import logging
import time

from cloudrouter import Controller, MatchOptions, Router, RouterConfig, Service

logger = logging.getLogger("notes")

# Module-level store: lives as long as the warm container
NOTES: dict[int, dict] = {}


class NoteService(Service):
    def create(self, text: str) -> dict:
        note = {"id": len(NOTES) + 1, "text": text, "owner": self.ctx.state.get("user")}
        NOTES[note["id"]] = note
        return note

    def get(self, note_id: int) -> dict:
        note = NOTES.get(note_id)
        if note is None:
            self.ctx.throw(404, f"note {note_id} not found")
        return note


class Notes(Controller):
    def create(self, ctx):
        text = ctx.data.get("text")
        if not text:
            ctx.throw(400, "text is required")
        return self.service.note.create(text)

    def get(self, ctx):
        return self.service.note.get(int(ctx.data["id"]))

    def list(self, ctx):
        return sorted(NOTES.values(), key=lambda n: n["id"])


class Health(Controller):
    def ping(self, ctx):
        return "pong"


async def timing(ctx, next):
    start = time.monotonic()
    await next()
    logger.info("%s took %.3fs", ctx.action, time.monotonic() - start)


async def auth(ctx, next):
    user = ctx.headers.get("x-user") if ctx.is_http else ctx.event.get("user")
    if not user:
        ctx.throw(401, "login required")
    ctx.state["user"] = user
    await next()


async def envelope(ctx, next):
    await next()
    ctx.body = {"code": 0, "data": ctx.body}


router = Router(
    RouterConfig(
        middleware=(
            timing,
            (auth, MatchOptions(ignore="health/")),
            (envelope, MatchOptions(name="envelope")),
        ),
    ),
    controller={"notes": Notes, "health": Health},
    service={"note": NoteService},
)


# Host entry point
main = router.entry(sync=True)
