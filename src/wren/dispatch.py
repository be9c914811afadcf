"""Dispatch — one path in, at most one handler invocation out.

Steps for each ``HostRequest``:

1. Resolve the path against the route table (first match wins).
2. Extract path parameters and merge every parameter source::

       host params < cli args < query < path params < hash params

3. Run the middleware chain with a fresh ``DispatchContext``.
4. If the chain completed, call the handler exactly once with the
   context params plus the parsed body (body keys win).

A path with no matching pattern, a middleware error, and a halted chain
all end without calling the handler. They come back as distinct
``DispatchOutcome`` kinds so the host can pick its own response.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from wren.context import DispatchContext, HostRequest
from wren.errors import Halted, MiddlewareError, NotFound
from wren.middleware.chain import MiddlewareChain
from wren.routing.params import extract_path_params, merge_params, parse_query
from wren.routing.table import RouteTable

logger = logging.getLogger("wren.dispatch")


class OutcomeKind(Enum):
    HANDLED = "handled"
    NOT_FOUND = "not_found"
    MIDDLEWARE_ERROR = "middleware_error"
    HALTED = "halted"


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """The result of a dispatch.

    ``result`` is the handler's return value (HANDLED only).
    ``error`` is the middleware error value (MIDDLEWARE_ERROR only).
    ``context`` is None only for NOT_FOUND.
    """

    kind: OutcomeKind
    path: str
    context: DispatchContext | None = None
    result: Any = None
    error: object | None = None
    failed: str | None = None

    @property
    def handled(self) -> bool:
        return self.kind is OutcomeKind.HANDLED

    @property
    def params(self) -> dict[str, Any]:
        """Params the middleware chain ended with (empty for NOT_FOUND)."""
        if self.context is None:
            return {}
        return self.context.params

    def unwrap(self) -> Any:
        """Return the handler result, or raise the matching ``DispatchError``."""
        if self.kind is OutcomeKind.HANDLED:
            return self.result
        if self.kind is OutcomeKind.NOT_FOUND:
            raise NotFound(f"No route matches {self.path!r}")
        if self.kind is OutcomeKind.MIDDLEWARE_ERROR:
            raise MiddlewareError(self.error, self.failed or "")
        raise Halted()


def dispatch(table: RouteTable, chain: MiddlewareChain, request: HostRequest) -> DispatchOutcome:
    """Dispatch *request* through *chain* to the matching handler in *table*."""
    match = table.find(request.path)
    if match is None:
        logger.debug("No route matches %r", request.path)
        return DispatchOutcome(kind=OutcomeKind.NOT_FOUND, path=request.path)

    route = match.route
    params = merge_params(
        request.host_params,
        request.cli_args,
        parse_query(request.query),
        extract_path_params(route.pattern, request.path),
        request.hash_params,
    )
    context = DispatchContext(
        path=request.path,
        query=request.query,
        pattern=route.pattern,
        params=params,
        handler=route.handler,
        method=request.method,
        headers=request.headers,
        body=request.body,
    )

    chain_result = chain.run(context)
    if chain_result.errored:
        return DispatchOutcome(
            kind=OutcomeKind.MIDDLEWARE_ERROR,
            path=request.path,
            context=context,
            error=chain_result.error,
            failed=chain_result.failed,
        )
    if chain_result.halted:
        logger.debug("Middleware chain halted for %r", request.path)
        return DispatchOutcome(kind=OutcomeKind.HALTED, path=request.path, context=context)

    body = request.body if isinstance(request.body, Mapping) else None
    result = context.handler(merge_params(context.params, body))
    return DispatchOutcome(
        kind=OutcomeKind.HANDLED,
        path=request.path,
        context=context,
        result=result,
    )
