"""``cloudrouter invoke`` — run one action and print the response as JSON."""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

from cloudrouter.cli._load import load_router
from cloudrouter.testing import make_event


_FAILURE_KEYS = frozenset({"code", "message", "stack"})


def _is_failure(result: Any) -> bool:
    return isinstance(result, dict) and {"code", "message"} <= result.keys() <= _FAILURE_KEYS


def _load_event(args: argparse.Namespace) -> dict[str, Any]:
    if args.event:
        return json.loads(Path(args.event).read_text(encoding="utf-8"))
    data = json.loads(args.data) if args.data else None
    return make_event(args.action, data)


def run_invoke(args: argparse.Namespace) -> None:
    """Load ``args.target``, serve one event and print the result.

    Exits with status 1 when the router can not be loaded, the event is
    not valid JSON, or the response is a failure.
    """
    try:
        router = load_router(args.target)
    except (ImportError, OSError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        event = _load_event(args)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
        router.config = dataclasses.replace(router.config, debug=True)

    result = router.handle(event)
    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))

    if _is_failure(result):
        raise SystemExit(1)
