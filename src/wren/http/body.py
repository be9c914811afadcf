"""Request body parsing for HTTP-style hosts.

Supports:
- ``application/x-www-form-urlencoded`` (stdlib)
- ``application/json`` (stdlib)

Anything else is left to the handler: ``parse_body`` returns None and
the adapter keeps the raw bytes on the dispatch context.
"""

import json
from typing import Any
from urllib.parse import parse_qsl

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def media_type(content_type: str | None) -> str:
    """Return the lower-cased media type without parameters."""
    if not content_type:
        return ""
    return content_type.split(";")[0].strip().lower()


def parse_body(body: bytes, content_type: str | None) -> Any:
    """Parse *body* according to *content_type*.

    Returns a dict for form bodies, whatever the JSON document holds for
    JSON bodies, and None for empty bodies or unsupported types.

    Raises:
        ValueError: If a JSON body is malformed or the bytes are not UTF-8.
    """
    if not body:
        return None

    kind = media_type(content_type)
    if kind == FORM_CONTENT_TYPE:
        return dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True))
    if kind == JSON_CONTENT_TYPE or kind.endswith("+json"):
        return json.loads(body.decode("utf-8"))
    return None
