"""Ordered route table with first-match resolution.

Patterns are tried in the order they were registered. The first one whose
matcher accepts the path wins, even when later patterns would also match.
``"*"`` is an ordinary entry: register it last to use it as a fallback.
"""

import logging
from collections.abc import Iterator

from wren._internal.types import Handler
from wren.errors import ConfigurationError, NotFound
from wren.routing.pattern import compile_pattern, validate_pattern
from wren.routing.route import Route, RouteMatch

logger = logging.getLogger("wren.routing")


class RouteTable:
    """Insertion-ordered mapping of pattern -> ``Route``.

    Usage::

        table = RouteTable()
        table.add("/profile/:id", show_profile)
        table.add("*", not_found_page)
        match = table.resolve("/profile/42")
    """

    __slots__ = ("_frozen", "_routes", "_strict")

    def __init__(self, *, strict: bool = False) -> None:
        self._routes: dict[str, Route] = {}
        self._strict = strict
        self._frozen = False

    def add(self, pattern: str, handler: Handler) -> Route:
        """Register *handler* for *pattern*. Must be called before freeze()."""
        if self._frozen:
            msg = "Cannot add routes after the router has started dispatching."
            raise ConfigurationError(msg)
        if pattern in self._routes:
            msg = f"Route pattern {pattern!r} is already registered."
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Handler for {pattern!r} must be callable, got {type(handler).__name__}."
            raise ConfigurationError(msg)
        if self._strict:
            validate_pattern(pattern)

        route = Route(pattern=pattern, handler=handler, matcher=compile_pattern(pattern))
        self._routes[pattern] = route
        return route

    def freeze(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in resolution order."""
        return list(self._routes.values())

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._routes

    def find(self, path: str) -> RouteMatch | None:
        """Return the first matching route for *path*, or None."""
        for route in self._routes.values():
            if route.matcher.matches(path):
                logger.debug("Resolved %r to pattern %r", path, route.pattern)
                return RouteMatch(route=route, path=path)
        return None

    def resolve(self, path: str) -> RouteMatch:
        """Resolve *path* to its route.

        Raises ``NotFound`` if no registered pattern matches.
        """
        match = self.find(path)
        if match is None:
            raise NotFound(f"No route matches {path!r}")
        return match
