"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(context: DispatchContext, next: Next) -> None

Built-in middleware:
    request_timer -- Stamp the dispatch start time into context.state
    inject_params -- Merge fixed values into the dispatch params
"""

from wren.middleware.builtin import inject_params, request_timer
from wren.middleware.chain import ChainResult, GlobalEntry, MiddlewareChain, ScopedEntry
from wren.middleware.protocol import Middleware, Next

__all__ = [
    "ChainResult",
    "GlobalEntry",
    "Middleware",
    "MiddlewareChain",
    "Next",
    "ScopedEntry",
    "inject_params",
    "request_timer",
]
