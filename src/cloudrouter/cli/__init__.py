"""cloudrouter CLI — invoke actions locally and list what a router exposes.

Entry point registered as ``cloudrouter`` in ``pyproject.toml``::

    [project.scripts]
    cloudrouter = "cloudrouter.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``cloudrouter`` command."""
    parser = argparse.ArgumentParser(
        prog="cloudrouter",
        description="cloudrouter — action routing for function-as-a-service handlers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- cloudrouter invoke -----------------------------------------------
    invoke_parser = subparsers.add_parser("invoke", help="Run one action through the router")
    invoke_parser.add_argument(
        "target", help="Function module or source file, optionally :attr (e.g. app.py:main)"
    )
    invoke_parser.add_argument(
        "action", nargs="?", default=None, help="Action path (e.g. user/login)"
    )
    invoke_parser.add_argument("--data", default=None, help="JSON payload for ctx.data")
    invoke_parser.add_argument(
        "--event",
        default=None,
        help="Path to a JSON file holding the full raw event (overrides action/--data)",
    )
    invoke_parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level and include stack traces in failures",
    )

    # -- cloudrouter actions ----------------------------------------------
    actions_parser = subparsers.add_parser("actions", help="List middleware and routable actions")
    actions_parser.add_argument(
        "target", help="Function module or source file, optionally :attr (e.g. app.py:main)"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "invoke":
        from cloudrouter.cli._invoke import run_invoke

        run_invoke(args)
    elif args.command == "actions":
        from cloudrouter.cli._actions import run_actions

        run_actions(args)
