"""HTTP response value for the server and serverless adapters."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Handlers may return one directly, or return plain values and let
    ``Response.from_result`` pick the content type.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8", errors="replace")

    # -- Construction --

    @classmethod
    def from_result(cls, value: Any, *, json_indent: int | None = 2) -> "Response":
        """Convert a handler return value into a Response.

        - ``Response``: returned as-is
        - ``str``: ``text/html``
        - ``bytes``: ``application/octet-stream``
        - anything else (mappings, lists, numbers, booleans, None):
          JSON, pretty-printed with *json_indent*
        """
        if isinstance(value, Response):
            return value
        if isinstance(value, str):
            return cls(body=value)
        if isinstance(value, (bytes, bytearray)):
            return cls(body=bytes(value), content_type="application/octet-stream")
        return cls.json(value, indent=json_indent)

    @classmethod
    def json(cls, data: Any, *, status: int = 200, indent: int | None = 2) -> "Response":
        """JSON response."""
        return cls(
            body=json.dumps(data, indent=indent, default=str),
            status=status,
            content_type="application/json",
        )

    @classmethod
    def jsonp(cls, data: Any, callback: str = "callback", *, status: int = 200) -> "Response":
        """JSON wrapped in a ``callback(...)`` call, served as JavaScript.

        U+2028 and U+2029 are valid in JSON but not in JavaScript string
        literals, so they are escaped.
        """
        payload = (
            json.dumps(data, default=str, ensure_ascii=False)
            .replace("\u2028", "\\u2028")
            .replace("\u2029", "\\u2029")
        )
        return cls(
            body=f"{callback}({payload});",
            status=status,
            content_type="text/javascript; charset=utf-8",
        )

    @classmethod
    def text_error(cls, status: int, detail: str) -> "Response":
        """Plain-text error response."""
        return cls(body=detail, status=status, content_type="text/plain; charset=utf-8")
