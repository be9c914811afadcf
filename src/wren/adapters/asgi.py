"""ASGI adapter — serve a Router as an ASGI 3 application.

The only component that touches raw ASGI. Buffers and parses the request
body, builds a ``HostRequest``, dispatches in a worker thread (handlers
are plain synchronous functions and may block), and translates the
outcome into a response::

    app = ASGIAdapter(router)
    # uvicorn module:app, hypercorn module:app, ...

Handlers return a ``Response`` or any value ``Response.from_result``
accepts. A middleware that halts the chain can answer by setting
``context.response``. Handlers see the request method as ``method`` and
the content type as ``contentType``, below every other parameter source.
"""

import logging
from typing import Any

from anyio import to_thread

from wren._internal.asgi import HTTPScope, Receive, Scope, Send
from wren.adapters._responses import outcome_to_response
from wren.context import HostRequest
from wren.dispatch import DispatchOutcome
from wren.http.body import parse_body
from wren.http.response import Response
from wren.router import Router
from wren.routing.params import host_params

logger = logging.getLogger("wren.server")


class BodyTooLarge(Exception):  # noqa: N818
    """The request body exceeded ``RouterConfig.max_body_size``."""


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    return not (100 <= status < 200 or status in {204, 304})


async def read_body(receive: Receive, limit: int) -> bytes:
    """Collect ``http.request`` chunks until ``more_body`` is false."""
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunk = message.get("body", b"")
        size += len(chunk)
        if size > limit:
            raise BodyTooLarge(f"Request body exceeds {limit} bytes")
        chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})


class ASGIAdapter:
    """ASGI application wrapping a ``Router``."""

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        response = await self.handle(HTTPScope.from_scope(scope), receive)
        await send_response(response, send)

    async def handle(self, http: HTTPScope, receive: Receive) -> Response:
        """Process one HTTP request into a Response."""
        config = self.router.config
        headers = http.header_map

        try:
            raw = await read_body(receive, config.max_body_size)
        except BodyTooLarge as exc:
            return Response.text_error(413, str(exc))

        try:
            body = parse_body(raw, headers.get("content-type"))
        except ValueError as exc:
            logger.debug("Malformed body for %s %s: %s", http.method, http.path, exc)
            return Response.text_error(400, "Malformed request body")

        request = HostRequest(
            path=http.route_path,
            query=http.query_string.decode("latin-1"),
            body=raw if body is None and raw else body,
            headers=headers,
            method=http.method,
            host_params=host_params(method=http.method, contentType=headers.get("content-type")),
        )

        try:
            outcome = await to_thread.run_sync(self.router.dispatch, request)
        except Exception as exc:
            logger.exception("500 %s %s", http.method, http.path)
            detail = f"Internal Server Error: {exc}" if config.debug else "Internal Server Error"
            return Response.text_error(500, detail)

        return self.to_response(outcome)

    def to_response(self, outcome: DispatchOutcome) -> Response:
        """Map a dispatch outcome onto an HTTP response."""
        return outcome_to_response(outcome, self.router.config)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message: dict[str, Any] = dict(await receive())
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
