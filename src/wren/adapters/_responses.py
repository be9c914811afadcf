"""Outcome -> Response mapping shared by the HTTP-style adapters."""

import logging

from wren.config import RouterConfig
from wren.dispatch import DispatchOutcome, OutcomeKind
from wren.http.response import Response

logger = logging.getLogger("wren.server")


def outcome_to_response(outcome: DispatchOutcome, config: RouterConfig) -> Response:
    """Map a dispatch outcome onto an HTTP response.

    - handled: the handler result via ``Response.from_result``
    - not found: 404
    - halted: the middleware's ``context.response``, else 500
    - middleware error: 500 (detail included when ``config.debug``)
    """
    if outcome.kind is OutcomeKind.HANDLED:
        return Response.from_result(outcome.result, json_indent=config.json_indent)

    if outcome.kind is OutcomeKind.NOT_FOUND:
        return Response.text_error(404, "Not Found")

    if outcome.kind is OutcomeKind.HALTED:
        if outcome.context is not None and outcome.context.response is not None:
            return Response.from_result(outcome.context.response, json_indent=config.json_indent)
        logger.warning("Middleware halted %r without setting a response", outcome.path)
        return Response.text_error(500, "Internal Server Error")

    detail = "Internal Server Error"
    if config.debug:
        detail = f"{detail}: middleware {outcome.failed} failed: {outcome.error}"
    return Response.text_error(500, detail)
