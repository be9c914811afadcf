"""Tests for wren.dispatch — parameter precedence and dispatch outcomes."""

import pytest

from wren.context import DispatchContext, HostRequest
from wren.dispatch import DispatchOutcome, OutcomeKind, dispatch
from wren.errors import Halted, MiddlewareError, NotFound
from wren.middleware.chain import MiddlewareChain
from wren.middleware.protocol import Next
from wren.routing.table import RouteTable


class Recorder:
    """Handler that remembers every params dict it was called with."""

    def __init__(self, result: object = "ok") -> None:
        self.calls: list[dict] = []
        self.result = result

    def __call__(self, params: dict) -> object:
        self.calls.append(params)
        return self.result


def _table(**routes: Recorder) -> RouteTable:
    table = RouteTable()
    for pattern, handler in routes.items():
        table.add(pattern, handler)
    return table


class TestParamPrecedence:
    def test_path_beats_query_beats_cli(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/thing/:foo", handler)
        request = HostRequest(
            path="/thing/path",
            query="foo=query&q=1",
            cli_args={"foo": "cli", "verbose": True},
        )

        dispatch(table, MiddlewareChain(), request)

        assert handler.calls == [{"foo": "path", "q": "1", "verbose": True}]

    def test_query_beats_cli(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/thing", handler)

        dispatch(table, MiddlewareChain(), HostRequest(path="/thing", query="foo=query", cli_args={"foo": "cli"}))

        assert handler.calls == [{"foo": "query"}]

    def test_host_params_lowest(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/thing", handler)
        request = HostRequest(
            path="/thing",
            host_params={"method": "POST", "contentType": "text/plain"},
            cli_args={"contentType": "cli"},
        )

        dispatch(table, MiddlewareChain(), request)

        assert handler.calls == [{"method": "POST", "contentType": "cli"}]

    def test_hash_params_beat_path(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/tab/:tab", handler)

        dispatch(table, MiddlewareChain(), HostRequest(path="/tab/1", hash_params={"tab": "2"}))

        assert handler.calls == [{"tab": "2"}]

    def test_body_wins_at_handler_time(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/profile/:id", handler)
        request = HostRequest(path="/profile/1", query="name=q", body={"name": "body", "id": "9"})

        outcome = dispatch(table, MiddlewareChain(), request)

        assert handler.calls == [{"id": "9", "name": "body"}]
        # Middleware saw the pre-body params
        assert outcome.params == {"id": "1", "name": "q"}

    def test_raw_body_not_merged(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/upload", handler)

        dispatch(table, MiddlewareChain(), HostRequest(path="/upload", body=b"\x00\x01"))

        assert handler.calls == [{}]

    def test_middleware_params_reach_handler(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/home", handler)
        chain = MiddlewareChain()

        def add_user(context: DispatchContext, next: Next) -> None:
            context.params["user"] = "ada"
            next()

        chain.use(add_user)
        dispatch(table, chain, HostRequest(path="/home"))

        assert handler.calls == [{"user": "ada"}]


class TestHandled:
    def test_exactly_one_handler_call(self) -> None:
        home, fallback = Recorder("home"), Recorder("fallback")
        table = RouteTable()
        table.add("/home", home)
        table.add("*", fallback)

        outcome = dispatch(table, MiddlewareChain(), HostRequest(path="/unknown"))

        assert home.calls == []
        assert fallback.calls == [{}]
        assert outcome.kind is OutcomeKind.HANDLED
        assert outcome.handled
        assert outcome.result == "fallback"
        assert outcome.unwrap() == "fallback"

    def test_context_describes_dispatch(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/profile/:id", handler)

        outcome = dispatch(table, MiddlewareChain(), HostRequest(path="/profile/3", method="GET"))

        assert outcome.context is not None
        assert outcome.context.pattern == "/profile/:id"
        assert outcome.context.method == "GET"
        assert outcome.context.handler is handler

    def test_long_chain_reaches_handler(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/x", handler)
        chain = MiddlewareChain()
        chain.use("/other", [lambda context, next: next() for _ in range(1000)])
        chain.use([lambda context, next: next() for _ in range(1000)])

        outcome = dispatch(table, chain, HostRequest(path="/x"))

        assert outcome.kind is OutcomeKind.HANDLED
        assert handler.calls == [{}]

    def test_handler_exception_propagates(self) -> None:
        def broken(params: dict) -> None:
            raise RuntimeError("handler failed")

        table = RouteTable()
        table.add("/x", broken)

        with pytest.raises(RuntimeError, match="handler failed"):
            dispatch(table, MiddlewareChain(), HostRequest(path="/x"))


class TestNotFound:
    def test_outcome(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/home", handler)
        calls: list[str] = []
        chain = MiddlewareChain()
        chain.use(lambda context, next: calls.append("mw"))

        outcome = dispatch(table, chain, HostRequest(path="/nope"))

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert outcome.context is None
        assert outcome.params == {}
        assert handler.calls == []
        assert calls == []

    def test_unwrap_raises(self) -> None:
        outcome = DispatchOutcome(kind=OutcomeKind.NOT_FOUND, path="/nope")
        with pytest.raises(NotFound) as exc_info:
            outcome.unwrap()
        assert exc_info.value.status == 404


class TestMiddlewareOutcomes:
    def test_error_skips_handler(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/home", handler)
        chain = MiddlewareChain()

        def deny(context: DispatchContext, next: Next) -> None:
            next("denied")

        chain.use(deny)
        outcome = dispatch(table, chain, HostRequest(path="/home"))

        assert outcome.kind is OutcomeKind.MIDDLEWARE_ERROR
        assert outcome.error == "denied"
        assert handler.calls == []
        with pytest.raises(MiddlewareError) as exc_info:
            outcome.unwrap()
        assert exc_info.value.status == 500
        assert exc_info.value.error == "denied"

    def test_halted_skips_handler(self) -> None:
        handler = Recorder()
        table = RouteTable()
        table.add("/home", handler)
        chain = MiddlewareChain()

        def answer(context: DispatchContext, next: Next) -> None:
            context.response = "cached"

        chain.use(answer)
        outcome = dispatch(table, chain, HostRequest(path="/home"))

        assert outcome.kind is OutcomeKind.HALTED
        assert outcome.context is not None
        assert outcome.context.response == "cached"
        assert handler.calls == []
        with pytest.raises(Halted):
            outcome.unwrap()
