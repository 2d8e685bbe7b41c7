"""``cloudrouter actions`` — list middleware order and routable actions."""

import argparse
import sys

from cloudrouter.cli._load import load_router


def run_actions(args: argparse.Namespace) -> None:
    """Print the middleware chain, then one routable action per line."""
    try:
        router = load_router(args.target)
    except (ImportError, OSError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    info = router.describe()

    print(f"controller root: {info['controller_path']}")
    print(f"service root:    {info['service_path']}")
    print()
    print("MIDDLEWARE")
    print("-" * 40)
    for position, name in enumerate(info["middleware"], start=1):
        print(f"{position:>3}  {name}")

    print()
    actions = info["actions"]
    if not actions:
        print("No actions registered.")
        return

    print("ACTION")
    print("-" * 40)
    for action in actions:
        print(action)
