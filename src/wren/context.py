"""Per-dispatch context and the normalized host request.

``HostRequest`` is what every host adapter builds from its environment
(browser location, HTTP request, argv, serverless event). The core never
looks past it.

``DispatchContext`` is created by the dispatcher for one dispatch and
handed to each middleware. Middleware may read it, add to ``params``,
stash values in ``state``, or set ``response`` before halting the chain.
It is never shared between dispatches.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from wren._internal.types import Handler, ParamSet


@dataclass(frozen=True, slots=True)
class HostRequest:
    """Normalized input from a host environment.

    Attributes:
        path: The path to resolve (``/profile/42``), without query or fragment.
        query: Raw query string, with or without the leading ``?``.
        body: Request body already parsed to a mapping by the adapter,
            the raw bytes when the content type was not parsed, or None.
        headers: Lower-cased header names to values.
        method: HTTP method, when the host has one.
        host_params: ParamSet of host facts (request method, content
            type) merged below every other source.
        cli_args: ParamSet parsed from command-line tokens.
        hash_params: ParamSet parsed from a URL fragment.
    """

    path: str
    query: str = ""
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    method: str | None = None
    host_params: ParamSet | None = None
    cli_args: ParamSet | None = None
    hash_params: ParamSet | None = None


@dataclass(slots=True)
class DispatchContext:
    """State for a single dispatch."""

    path: str
    query: str
    pattern: str
    params: ParamSet
    handler: Handler
    method: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    state: dict[str, Any] = field(default_factory=dict)
    # Set by middleware that answers the request itself and halts the chain
    response: Any = None
