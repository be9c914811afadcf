"""Wren exception hierarchy.

Shared across the routing table, middleware chain, dispatcher, and host
adapters so every module raises and catches the same types.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when router setup is invalid.

    Duplicate patterns, strict pattern validation failures, and
    registration after the router has frozen all end up here.
    """


@dataclass(frozen=True, slots=True)
class DispatchError(WrenError):
    """A dispatch that ended without a handler invocation.

    Dispatch reports these as outcomes. They are only raised when an
    adapter asks for it via ``DispatchOutcome.unwrap()``.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(DispatchError):  # noqa: N818
    """404 — no pattern in the table matched the path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MiddlewareError(DispatchError):
    """500 — a middleware signalled an error or raised.

    ``error`` is the value passed to ``next(err)`` (or the raised
    exception); ``middleware`` names the entry that failed.
    """

    # Extra attributes live outside the frozen dataclass fields.
    __slots__ = ("error", "middleware")

    def __init__(self, error: object, middleware: str = "", detail: str = "") -> None:
        super().__init__(status=500, detail=detail or f"Middleware error: {error}")
        object.__setattr__(self, "error", error)
        object.__setattr__(self, "middleware", middleware)


class Halted(DispatchError):  # noqa: N818
    """500 — a middleware returned without calling ``next``."""

    def __init__(self, detail: str = "Middleware chain halted") -> None:
        super().__init__(status=500, detail=detail)
