"""``wren call`` — dispatch a path through a router from the shell.

Exit codes:
    0  handler ran; its result is printed
    1  a middleware failed or halted the chain
    2  no route matched the path
"""

import argparse
import json
import logging
import sys

from wren.adapters.cli import request_from_argv
from wren.cli._resolve import resolve_router
from wren.dispatch import OutcomeKind
from wren.errors import ConfigurationError


def run_call(args: argparse.Namespace) -> None:
    """Dispatch ``args.args`` through ``args.router`` and print the outcome."""
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        router = resolve_router(args.router)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    outcome = router.dispatch(request_from_argv(args.args, router.config))

    if outcome.kind is OutcomeKind.NOT_FOUND:
        print(f"No route matches {outcome.path!r}.", file=sys.stderr)
        raise SystemExit(2)
    if outcome.kind is OutcomeKind.MIDDLEWARE_ERROR:
        print(f"Middleware {outcome.failed} failed: {outcome.error}", file=sys.stderr)
        raise SystemExit(1)
    if outcome.kind is OutcomeKind.HALTED:
        print(f"Middleware halted the dispatch of {outcome.path!r}.", file=sys.stderr)
        raise SystemExit(1)

    result = outcome.result
    if result is None:
        return
    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, indent=router.config.json_indent, default=str))
