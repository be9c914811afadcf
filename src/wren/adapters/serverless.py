"""Serverless adapter — API Gateway proxy events in, proxy responses out.

::

    router = Router({"/home": home, "/user/:userId": show_user})

    def handler(event, context):
        return handle_event(router, event, context)

Reads ``path``, ``httpMethod``, ``headers``, ``queryStringParameters``
(or ``multiValueQueryStringParameters`` / ``rawQueryString``), ``body``
and ``isBase64Encoded``. A body without a content type is read as JSON.

Handlers see the request method as ``method`` and the content type as
``contentType``. Both sit below every other parameter source, so a path,
query or body key of the same name wins.
"""

import base64
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from wren.adapters._responses import outcome_to_response
from wren.context import HostRequest
from wren.http.body import JSON_CONTENT_TYPE, parse_body
from wren.http.response import Response
from wren.router import Router
from wren.routing.params import host_params

logger = logging.getLogger("wren.server")


def _query_from_event(event: Mapping[str, Any]) -> str:
    multi = event.get("multiValueQueryStringParameters")
    if multi:
        return urlencode(multi, doseq=True)
    single = event.get("queryStringParameters")
    if single:
        return urlencode(single)
    return event.get("rawQueryString") or ""


def _body_from_event(event: Mapping[str, Any]) -> bytes:
    body = event.get("body")
    if not body:
        return b""
    if not isinstance(body, (str, bytes, bytearray)):
        msg = f"Event body must be a string, got {type(body).__name__}"
        raise ValueError(msg)
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode("utf-8") if isinstance(body, str) else bytes(body)


def to_proxy_response(response: Response) -> dict[str, Any]:
    """Translate a Response into an API Gateway proxy response dict."""
    headers = {"Content-Type": response.content_type}
    headers.update(response.headers)
    binary = isinstance(response.body, bytes)
    return {
        "statusCode": response.status,
        "headers": headers,
        "body": base64.b64encode(response.body).decode("ascii") if binary else response.body,
        "isBase64Encoded": binary,
    }


def request_from_event(event: Mapping[str, Any], router: Router) -> HostRequest:
    """Build a HostRequest from a proxy event.

    Raises:
        ValueError: If the body cannot be decoded or parsed.
    """
    headers = {str(k).lower(): str(v) for k, v in (event.get("headers") or {}).items()}
    method = event.get("httpMethod")
    content_type = headers.get("content-type")
    raw = _body_from_event(event)
    body = parse_body(raw, content_type or JSON_CONTENT_TYPE)
    return HostRequest(
        path=event.get("path") or event.get("rawPath") or router.config.default_path,
        query=_query_from_event(event),
        body=raw if body is None and raw else body,
        headers=headers,
        method=method,
        host_params=host_params(method=method, contentType=content_type),
    )


def handle_event(router: Router, event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Dispatch a proxy *event* through *router* and return the proxy response.

    *context* is the platform's invocation context; it is accepted for
    signature compatibility and not used.
    """
    try:
        request = request_from_event(event, router)
    except ValueError as exc:
        logger.debug("Malformed event body for %s: %s", event.get("path"), exc)
        return to_proxy_response(Response.text_error(400, "Malformed request body"))

    try:
        outcome = router.dispatch(request)
    except Exception as exc:
        logger.exception("500 %s %s", request.method, request.path)
        detail = f"Internal Server Error: {exc}" if router.config.debug else "Internal Server Error"
        return to_proxy_response(Response.text_error(500, detail))

    return to_proxy_response(outcome_to_response(outcome, router.config))
