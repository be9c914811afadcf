"""Tests for wren.router — registration, freezing, and dispatch entry points."""

import threading

import pytest

from wren import HostRequest, OutcomeKind, Router, RouterConfig
from wren.context import DispatchContext
from wren.errors import ConfigurationError, NotFound
from wren.middleware.chain import GlobalEntry, ScopedEntry
from wren.middleware.protocol import Next


def _echo(params: dict) -> dict:
    return params


class TestRegistration:
    def test_mapping_keeps_insertion_order(self) -> None:
        router = Router({"/b": _echo, "/a": _echo, "*": _echo})
        assert [r.pattern for r in router.routes] == ["/b", "/a", "*"]

    def test_add_appends(self) -> None:
        router = Router({"/a": _echo})
        route = router.add("/b", _echo)
        assert route.pattern == "/b"
        assert [r.pattern for r in router.routes] == ["/a", "/b"]

    def test_route_decorator(self) -> None:
        router = Router()

        @router.route("/profile/:id")
        def show(params: dict) -> str:
            return f"profile {params['id']}"

        assert show({"id": "1"}) == "profile 1"
        assert router.dispatch("/profile/42").result == "profile 42"

    def test_use_returns_router(self) -> None:
        router = Router()

        def mw(context: DispatchContext, next: Next) -> None:
            next()

        assert router.use(mw).use("/a", [mw, mw]) is router
        entries = router.middleware
        assert isinstance(entries[0], GlobalEntry)
        assert all(isinstance(e, ScopedEntry) for e in entries[1:])

    def test_strict_config_validates(self) -> None:
        with pytest.raises(ConfigurationError, match="unbalanced"):
            Router({"/docs(": _echo}, config=RouterConfig(strict_patterns=True))

    def test_duplicate_rejected(self) -> None:
        router = Router({"/a": _echo})
        with pytest.raises(ConfigurationError):
            router.add("/a", _echo)


class TestFreeze:
    def test_add_after_dispatch_rejected(self) -> None:
        router = Router({"/a": _echo})
        router.dispatch("/a")
        with pytest.raises(ConfigurationError, match="after the router"):
            router.add("/b", _echo)

    def test_use_after_dispatch_rejected(self) -> None:
        router = Router({"/a": _echo})
        router.dispatch("/a")
        with pytest.raises(ConfigurationError, match="after the router"):
            router.use(lambda context, next: next())

    def test_resolve_does_not_freeze(self) -> None:
        router = Router({"/a": _echo})
        router.resolve("/a")
        router.add("/b", _echo)
        assert len(router.routes) == 2

    def test_concurrent_first_dispatch(self) -> None:
        router = Router({"/n/:n": _echo})
        results: list[object] = []

        def worker(n: int) -> None:
            results.append(router.dispatch(f"/n/{n}").result)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(r["n"] for r in results) == [str(i) for i in range(8)]


class TestDispatch:
    def test_string_path(self) -> None:
        router = Router({"/profile/:id/user/:uId": _echo})
        outcome = router.dispatch("/profile/1/user/2")
        assert outcome.kind is OutcomeKind.HANDLED
        assert outcome.result == {"id": "1", "uId": "2"}

    def test_host_request(self) -> None:
        router = Router({"/search": _echo})
        outcome = router.dispatch(HostRequest(path="/search", query="q=wren"))
        assert outcome.result == {"q": "wren"}

    def test_callable(self) -> None:
        router = Router({"/a": _echo})
        assert router("/a").handled

    def test_not_found(self) -> None:
        router = Router({"/a": _echo})
        assert router.dispatch("/b").kind is OutcomeKind.NOT_FOUND
        with pytest.raises(NotFound):
            router.resolve("/b")

    def test_middleware_runs_before_handler(self) -> None:
        calls: list[str] = []

        def handler(params: dict) -> None:
            calls.append("handler")

        def mw(context: DispatchContext, next: Next) -> None:
            calls.append("mw")
            next()

        router = Router({"/a": handler})
        router.use(mw)
        router.dispatch("/a")

        assert calls == ["mw", "handler"]
