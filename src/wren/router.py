"""Wren router.

Owns a route table and a middleware chain. Mutable during setup (route
and middleware registration), frozen when the first dispatch runs.
"""

import threading
from collections.abc import Callable, Mapping
from typing import Any

from wren._internal.types import Handler
from wren.config import RouterConfig
from wren.context import HostRequest
from wren.dispatch import DispatchOutcome, dispatch
from wren.middleware.chain import MiddlewareChain, MiddlewareEntry
from wren.routing.route import Route, RouteMatch
from wren.routing.table import RouteTable


class Router:
    """A route table plus the middleware that runs in front of it.

    Usage::

        router = Router({
            "/profile": list_profiles,
            "/profile/:id": show_profile,
            "*": fallback,
        })

        @router.route("/profile/:id/user/:uId")
        def show_user(params):
            ...

        router.use(timer)
        router.use("/profile/:id", [load_profile, audit])

        outcome = router.dispatch(HostRequest(path="/profile/42"))

    Thread safety:
        Setup is single-threaded. The freeze on first dispatch uses a
        Lock + double-check so concurrent first requests from several
        worker threads freeze exactly once. After that the table and
        chain are read-only and dispatches share nothing.
    """

    __slots__ = ("_chain", "_freeze_lock", "_frozen", "_table", "config")

    def __init__(
        self,
        routes: Mapping[str, Handler] | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._table = RouteTable(strict=self.config.strict_patterns)
        self._chain = MiddlewareChain(strict=self.config.strict_patterns)
        self._frozen = False
        self._freeze_lock = threading.Lock()
        for pattern, handler in (routes or {}).items():
            self._table.add(pattern, handler)

    # -- Route registration --

    def add(self, pattern: str, handler: Handler) -> Route:
        """Register *handler* for *pattern*, after any existing routes."""
        return self._table.add(pattern, handler)

    def route(self, pattern: str) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self._table.add(pattern, func)
            return func

        return decorator

    # -- Middleware --

    def use(self, *args: Any) -> "Router":
        """Register middleware.

        Accepts ``use(fn)``, ``use([fn, ...])``, ``use(pattern, fn)`` and
        ``use(pattern, [fn, ...])``. Returns the router for chaining.
        """
        self._chain.use(*args)
        return self

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        return self._table.routes

    @property
    def middleware(self) -> tuple[MiddlewareEntry, ...]:
        return self._chain.entries

    def resolve(self, path: str) -> RouteMatch:
        """Resolve *path* to its route. Raises ``NotFound``."""
        return self._table.resolve(path)

    # -- Dispatch --

    def dispatch(self, request: HostRequest | str) -> DispatchOutcome:
        """Dispatch a host request (or a bare path) to its handler."""
        self._ensure_frozen()
        if isinstance(request, str):
            request = HostRequest(path=request)
        return dispatch(self._table, self._chain, request)

    def __call__(self, request: HostRequest | str) -> DispatchOutcome:
        return self.dispatch(request)

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._table.freeze()
            self._chain.freeze()
            self._frozen = True
