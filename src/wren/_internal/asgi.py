"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with a typed
dataclass for the adapter's internal use.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """The parts of an ASGI HTTP scope the router needs."""

    method: str
    path: str
    query_string: bytes
    root_path: str
    headers: tuple[tuple[bytes, bytes], ...]

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b""),
            root_path=scope.get("root_path", ""),
            headers=tuple(scope.get("headers", ())),
        )

    @property
    def header_map(self) -> dict[str, str]:
        """Headers as lower-cased names to values. A repeated header keeps its last value."""
        return {
            name.decode("latin-1").lower(): value.decode("latin-1")
            for name, value in self.headers
        }

    @property
    def route_path(self) -> str:
        """Path with the mount prefix removed."""
        if self.root_path and self.path.startswith(self.root_path):
            return self.path[len(self.root_path) :] or "/"
        return self.path
