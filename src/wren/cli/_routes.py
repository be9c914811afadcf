"""``wren routes`` — list registered routes and middleware.

Resolves an import string to a wren Router and prints its route table in
resolution order, followed by the middleware chain.
"""

import argparse
import sys

from wren.cli._resolve import resolve_router
from wren.errors import ConfigurationError
from wren.middleware.chain import ScopedEntry, entries_for


def _handler_name(handler: object) -> str:
    return getattr(handler, "__name__", None) or type(handler).__name__


def run_routes(args: argparse.Namespace) -> None:
    """Print the routes (and middleware) of ``args.router``.

    With ``--path``, only the route that path resolves to and the
    middleware that would run for it are shown.
    """
    try:
        router = resolve_router(args.router)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = router.routes
    middleware = list(router.middleware)
    if args.path is not None:
        routes = [route for route in routes if route.matcher.matches(args.path)][:1]
        middleware = entries_for(middleware, args.path)
        if not routes:
            print(f"No route matches {args.path!r}.", file=sys.stderr)
            raise SystemExit(2)

    if not routes:
        print("No routes registered.")
        return

    # Build rows: (pattern, handler_name)
    rows = [(route.pattern, _handler_name(route.handler)) for route in routes]
    max_pattern = max(max(len(r[0]) for r in rows), len("PATTERN"))

    fmt = f"{{:<{max_pattern}}}  {{}}"
    print(fmt.format("PATTERN", "HANDLER"))
    sep_len = max_pattern + 2 + max(len(r[1]) for r in rows)
    print("-" * min(sep_len, 80))
    for pattern, handler_name in rows:
        print(fmt.format(pattern, handler_name))

    if middleware:
        print()
        print("MIDDLEWARE")
        for position, entry in enumerate(middleware, start=1):
            scope = entry.pattern if isinstance(entry, ScopedEntry) else "*all*"
            print(f"{position:>3}. {entry.name}  [{scope}]")
