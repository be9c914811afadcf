"""Browser-style navigation for single-page flows.

A ``Navigator`` plays the part of a page's location: the route lives in
the URL fragment (``/app?lang=en#/profile/7?tab=3``), the page query
string supplies query params, and the fragment's own query supplies hash
params. ``href()`` moves to a new route the way clicking an in-page link
would::

    nav = Navigator(router, "https://example.com/app?lang=en")
    nav.load()                 # dispatches "/app" (no fragment yet)
    nav.href("#/profile/7")    # dispatches "/profile/7" with {"lang": "en", "id": "7"}
    nav.location               # "https://example.com/app?lang=en#/profile/7"
    nav.back()                 # re-dispatches "/app"
"""

from urllib.parse import urlsplit

from wren.config import RouterConfig
from wren.context import HostRequest
from wren.dispatch import DispatchOutcome
from wren.routing.params import parse_hash_params
from wren.router import Router


def request_from_url(url: str, config: RouterConfig | None = None) -> HostRequest:
    """Build a HostRequest from a full or relative URL.

    The route comes from the fragment when there is one, otherwise from
    the URL path.
    """
    config = config or RouterConfig()
    parts = urlsplit(url)
    if parts.fragment:
        path = parts.fragment.partition("?")[0]
        hash_params = parse_hash_params(parts.fragment)
    else:
        path = parts.path
        hash_params = {}
    return HostRequest(
        path=path or config.default_path,
        query=parts.query,
        hash_params=hash_params,
    )


class Navigator:
    """Tracks a current location and dispatches on every navigation."""

    __slots__ = ("_history", "location", "router")

    def __init__(self, router: Router, location: str = "/") -> None:
        self.router = router
        self.location = location
        self._history: list[str] = []

    @property
    def history(self) -> tuple[str, ...]:
        """Locations visited before the current one, oldest first."""
        return tuple(self._history)

    def load(self, url: str | None = None) -> DispatchOutcome:
        """Dispatch *url* (default: the current location) as a page load."""
        if url is not None and url != self.location:
            self._history.append(self.location)
            self.location = url
        return self.router.dispatch(request_from_url(self.location, self.router.config))

    def href(self, path: str) -> DispatchOutcome:
        """Navigate to *path* within the page by setting the fragment.

        A leading ``#`` is optional. An empty path goes to
        ``config.default_path``.
        """
        target = path.replace("#", "", 1) or self.router.config.default_path
        base = self.location.partition("#")[0]
        return self.load(f"{base}#{target}")

    def back(self) -> DispatchOutcome | None:
        """Return to the previous location. None when there is no history."""
        if not self._history:
            return None
        self.location = self._history.pop()
        return self.router.dispatch(request_from_url(self.location, self.router.config))
