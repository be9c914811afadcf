"""Wren CLI — inspect a router and dispatch paths from the shell.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — one URL router for browsers, servers, and the command line.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes and middleware")
    routes_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    routes_parser.add_argument(
        "--path",
        default=None,
        help="Only show the route and middleware that a dispatch of PATH would use",
    )

    # -- wren call --------------------------------------------------------
    call_parser = subparsers.add_parser(
        "call",
        help="Dispatch a path and print the result",
        allow_abbrev=False,
    )
    call_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    call_parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Path followed by --name=value / --flag / -abc parameters",
    )
    call_parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for wren's loggers",
    )

    args, extra = parser.parse_known_args(argv)
    if extra:
        if args.command != "call":
            parser.error(f"unrecognized arguments: {' '.join(extra)}")
        # Options that argparse peeled off before the REMAINDER belong to the dispatch
        args.args = [*args.args, *extra]

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "call":
        from wren.cli._call import run_call

        run_call(args)
