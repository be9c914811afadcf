"""Route pattern compilation.

Turns a pattern such as ``/profile/:id/user/:uId`` into an anchored
regular expression plus the ordered names of its capture groups::

    matcher = compile_pattern("/profile/:id")
    matcher.match("/profile/42")   # {"id": "42"}
    matcher.match("/profile")      # None

Syntax:

    ``:name``     one path segment (no slash)
    ``*name``     catch-all, may span segments or be empty
    ``*``         bare trailing catch-all (unnamed)
    ``(...)``     optional group

Compilation never fails. A pattern whose generated expression is not a
valid regex compiles to a matcher that rejects every path, and a warning
is logged. ``validate_pattern`` performs the checks strict routers run
at registration time.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from wren.errors import ConfigurationError

logger = logging.getLogger("wren.routing")

_ESCAPE = re.compile(r"[\-{}\[\]+?.,\\^$|#\s]")
_OPTIONAL = re.compile(r"\((.*?)\)")
# One pass over named params and splats so group order follows source order.
# A ``:name`` right after ``(?`` sits inside a non-capturing group and stays literal.
_CAPTURE = re.compile(r"(\(\?)?:(\w+)|\*(\w+)|\*\Z")

# Matches nothing; stands in for expressions that fail to compile
_NEVER = re.compile(r"(?!)")


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """A compiled route pattern.

    ``param_names[i]`` names capture group ``i + 1``. A bare ``*``
    captures without a name and is recorded as ``None``.
    """

    pattern: str
    source: str
    regex: re.Pattern[str]
    param_names: tuple[str | None, ...]

    def matches(self, path: str) -> bool:
        """Return True if *path* matches the whole pattern."""
        return self.regex.fullmatch(path) is not None

    def match(self, path: str) -> dict[str, str] | None:
        """Return the named captures for *path*, or None if it doesn't match.

        Optional groups that did not participate are left out.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        captures: dict[str, str] = {}
        for index, name in enumerate(self.param_names, start=1):
            if name is None:
                continue
            value = m.group(index)
            if value is not None:
                captures[name] = value
        return captures


def translate(pattern: str) -> tuple[str, tuple[str | None, ...]]:
    """Translate a route pattern into anchored regex source and capture names."""
    names: list[str | None] = []

    def _replace(m: re.Match[str]) -> str:
        if m.group(1):
            return m.group(0)
        if m.group(2):
            names.append(m.group(2))
            return "([^/]+)"
        names.append(m.group(3))  # None for a bare trailing ``*``
        return "(.*?)"

    route = _ESCAPE.sub(r"\\\g<0>", pattern)
    route = _OPTIONAL.sub(r"(?:\1)?", route)
    route = _CAPTURE.sub(_replace, route)
    return f"^{route}$", tuple(names)


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> CompiledMatcher:
    """Compile *pattern* into a ``CompiledMatcher``.

    Pure and cached: the same pattern string always yields the same
    matcher object while it stays in the cache.
    """
    source, names = translate(pattern)
    try:
        regex = re.compile(source)
    except re.error as exc:
        logger.warning(
            "Route pattern %r compiled to an invalid expression (%s); it will never match",
            pattern,
            exc,
        )
        regex = _NEVER
    return CompiledMatcher(pattern=pattern, source=source, regex=regex, param_names=names)


def validate_pattern(pattern: str) -> None:
    """Reject patterns a strict router refuses to register.

    Raises ``ConfigurationError`` for unbalanced parentheses, repeated
    parameter names, or an expression that does not compile.
    """
    depth = 0
    for char in pattern:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                break
    if depth != 0:
        msg = f"Route pattern {pattern!r} has unbalanced parentheses."
        raise ConfigurationError(msg)

    source, names = translate(pattern)
    named = [name for name in names if name is not None]
    duplicates = sorted({name for name in named if named.count(name) > 1})
    if duplicates:
        msg = f"Route pattern {pattern!r} repeats parameter names: {', '.join(duplicates)}"
        raise ConfigurationError(msg)

    try:
        re.compile(source)
    except re.error as exc:
        msg = f"Route pattern {pattern!r} is not a valid matcher: {exc}"
        raise ConfigurationError(msg) from exc
