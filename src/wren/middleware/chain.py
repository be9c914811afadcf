"""Middleware chain — ordered entries with cooperative ``next`` continuations.

Entries are either global (run for every dispatch) or scoped to a route
pattern (run only when the dispatched path matches that pattern). They run
strictly in registration order. Each entry receives a single-use ``next``;
calling it marks the entry as done and the chain moves to the following
entry once the current one returns. Only one entry is ever running, and
work after ``next()`` happens before the following entry starts.

Outcomes of ``run()``:

- every entry called ``next()``: the chain is complete
- an entry called ``next(err)`` or raised: the error is logged and the
  chain stops
- an entry returned without calling ``next``: the chain is halted
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, TypeAlias

from wren.context import DispatchContext
from wren.errors import ConfigurationError
from wren.middleware.protocol import Middleware
from wren.routing.pattern import CompiledMatcher, compile_pattern, validate_pattern

logger = logging.getLogger("wren.middleware")


def _describe(func: Callable[..., Any]) -> str:
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    return name or type(func).__name__


@dataclass(frozen=True, slots=True)
class GlobalEntry:
    """Middleware applied to every dispatch."""

    func: Middleware

    @property
    def name(self) -> str:
        return _describe(self.func)

    def applies_to(self, path: str) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ScopedEntry:
    """Middleware applied only when the dispatched path matches ``pattern``."""

    pattern: str
    func: Middleware
    matcher: CompiledMatcher

    @property
    def name(self) -> str:
        return _describe(self.func)

    def applies_to(self, path: str) -> bool:
        return self.matcher.matches(path)


MiddlewareEntry: TypeAlias = GlobalEntry | ScopedEntry


@dataclass(frozen=True, slots=True)
class ChainResult:
    """How a chain run ended."""

    completed: bool
    error: object | None = None
    failed: str | None = None  # name of the middleware that failed

    @property
    def errored(self) -> bool:
        return self.failed is not None

    @property
    def halted(self) -> bool:
        return not self.completed and self.failed is None


class _Continuation:
    """The single-use ``next`` handed to one entry.

    Calling it only records the decision. The chain loop acts on it once
    the entry returns.
    """

    __slots__ = ("_context", "_entry", "error", "used")

    def __init__(self, entry: MiddlewareEntry, context: DispatchContext) -> None:
        self._entry = entry
        self._context = context
        self.used = False
        self.error: object | None = None

    def __call__(self, err: object | None = None) -> None:
        if self.used:
            logger.warning(
                "Middleware %s called next() more than once while dispatching %r; ignoring",
                self._entry.name,
                self._context.path,
            )
            return
        self.used = True
        self.error = err


def _failed(entry: MiddlewareEntry, context: DispatchContext, error: object) -> ChainResult:
    logger.error(
        "Middleware %s failed while dispatching %r: %s",
        entry.name,
        context.path,
        error,
        exc_info=error if isinstance(error, BaseException) else None,
    )
    return ChainResult(completed=False, error=error, failed=entry.name)


class MiddlewareChain:
    """Ordered middleware entries, frozen once dispatching starts.

    Usage::

        chain = MiddlewareChain()
        chain.use(log_request)
        chain.use("/admin/*rest", [require_user, audit])
        result = chain.run(context)
    """

    __slots__ = ("_entries", "_frozen", "_strict")

    def __init__(self, *, strict: bool = False) -> None:
        self._entries: list[MiddlewareEntry] = []
        self._frozen = False
        self._strict = strict

    def register(self, entry: MiddlewareEntry) -> None:
        """Append a single entry."""
        if self._frozen:
            msg = "Cannot add middleware after the router has started dispatching."
            raise ConfigurationError(msg)
        self._entries.append(entry)

    def use(self, *args: Any) -> None:
        """Register middleware, normalizing the accepted call shapes.

        ``use(fn)``, ``use([fn, ...])``, ``use(pattern, fn)`` and
        ``use(pattern, [fn, ...])``. Lists keep their relative order.
        """
        if len(args) == 1:
            for func in self._functions(args[0]):
                self.register(GlobalEntry(func))
            return

        if len(args) == 2 and isinstance(args[0], str):
            pattern = args[0]
            if self._strict:
                validate_pattern(pattern)
            matcher = compile_pattern(pattern)
            for func in self._functions(args[1]):
                self.register(ScopedEntry(pattern, func, matcher))
            return

        msg = "use() takes a middleware, a list of middleware, or a pattern followed by either."
        raise ConfigurationError(msg)

    @staticmethod
    def _functions(value: Any) -> list[Middleware]:
        funcs = list(value) if isinstance(value, (list, tuple)) else [value]
        for func in funcs:
            if not callable(func):
                msg = f"Middleware must be callable, got {type(func).__name__}."
                raise ConfigurationError(msg)
        return funcs

    def freeze(self) -> None:
        self._frozen = True

    @property
    def entries(self) -> tuple[MiddlewareEntry, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[MiddlewareEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def run(self, context: DispatchContext) -> ChainResult:
        """Run the chain for one dispatch.

        Entries are visited in a loop, one at a time, so the depth of the
        call stack does not grow with the number of entries.
        """
        for entry in tuple(self._entries):
            if not entry.applies_to(context.path):
                continue

            proceed = _Continuation(entry, context)
            try:
                entry.func(context, proceed)
            except Exception as exc:
                # A next(err) recorded before the raise is the reported error
                return _failed(entry, context, exc if proceed.error is None else proceed.error)

            if proceed.error is not None:
                return _failed(entry, context, proceed.error)
            if not proceed.used:
                return ChainResult(completed=False)

        return ChainResult(completed=True)


def entries_for(chain: Iterable[MiddlewareEntry], path: str) -> list[MiddlewareEntry]:
    """Entries that would run for *path*, in order."""
    return [entry for entry in chain if entry.applies_to(path)]
