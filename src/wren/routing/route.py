"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from wren._internal.types import Handler
from wren.routing.pattern import CompiledMatcher


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route: pattern, handler, and the pattern's matcher.

    Created during router setup. Immutable once registered.
    """

    pattern: str
    handler: Handler
    matcher: CompiledMatcher


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful resolution."""

    route: Route
    path: str

    @property
    def pattern(self) -> str:
        return self.route.pattern
