"""Parameter sources and the merge that combines them.

Each host supplies some of these sources; the dispatcher folds them
left to right, later sources overwriting earlier ones::

    host params  <  cli args  <  query string  <  path params  <  hash params  (<  body)

All parsers are total: malformed input yields fewer keys, never an error.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import parse_qsl

from wren._internal.types import ParamSet

_PARAM_TOKEN = re.compile(r":(\w+)")


def parse_cli_args(argv: Iterable[str]) -> ParamSet:
    """Parse command-line tokens into a ParamSet.

    Examples::

        ["--foo=bar"]   -> {"foo": "bar"}
        ["--verbose"]   -> {"verbose": True}
        ["-xvf"]        -> {"x": True, "v": True, "f": True}
        ["/profile/1"]  -> {}
    """
    args: ParamSet = {}
    for token in argv:
        if token.startswith("--"):
            name, sep, value = token[2:].partition("=")
            if not name:
                continue
            args[name] = value if sep else True
        elif token.startswith("-") and token[1:].isalpha():
            for flag in token[1:]:
                args[flag] = True
    return args


def parse_query(raw_query: str | bytes | None) -> ParamSet:
    """Parse a raw query string (with or without the leading ``?``).

    Values are percent-decoded. A repeated key keeps its last value.
    """
    if not raw_query:
        return {}
    if isinstance(raw_query, bytes):
        raw_query = raw_query.decode("latin-1")
    return dict(parse_qsl(raw_query.removeprefix("?"), keep_blank_values=True))


def parse_hash_params(fragment: str | None) -> ParamSet:
    """Parse parameters carried in a URL fragment.

    ``#/profile/7?tab=3`` yields ``{"tab": "3"}``. A fragment that is
    itself ``k=v`` pairs (``#tab=3&sort=asc``) is parsed whole. A
    fragment that is only a route path yields nothing.
    """
    if not fragment:
        return {}
    fragment = fragment.removeprefix("#")
    if "?" in fragment:
        return parse_query(fragment.partition("?")[2])
    if "=" in fragment and not fragment.startswith("/"):
        return parse_query(fragment)
    return {}


def extract_path_params(pattern: str, path: str) -> ParamSet:
    """Map the ``:name`` segments of *pattern* onto the segments of *path*.

    Pattern and path are split on ``/`` and paired by position, so
    ``/profile/:id/tab/:tabId`` against ``/profile/7/tab/3`` gives
    ``{"id": "7", "tabId": "3"}``. Names whose position the path does
    not reach are left out.

    Pairing is by position only, so it can disagree with
    ``CompiledMatcher.match`` when an optional group or a splat comes
    before a ``:name`` segment. ``/a(/b)/:id`` against ``/a/5`` gives ``{}``,
    and ``/x/*rest/:id`` against ``/x/a/b/9`` gives ``{"id": "b"}``. Put
    optional groups and splats after the named segments when the
    values matter.
    """
    path_segments = path.split("/")
    params: ParamSet = {}
    for position, segment in enumerate(pattern.split("/")):
        m = _PARAM_TOKEN.match(segment)
        if m is None:
            continue
        if position < len(path_segments):
            params[m.group(1)] = path_segments[position]
    return params


def merge_params(*sources: Mapping[str, Any] | None) -> ParamSet:
    """Fold ParamSets left to right into a new dict. Later sources win.

    ``None`` sources are skipped so hosts can pass absent sources as-is.
    """
    merged: ParamSet = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged


def host_params(**values: Any) -> ParamSet:
    """Build the host-facts ParamSet, leaving out values the host lacks.

    ::

        host_params(method="POST", contentType=None)  -> {"method": "POST"}
    """
    return {name: value for name, value in values.items() if value is not None}
