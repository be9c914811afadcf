"""Tests for wren.adapters.cli — argv to HostRequest."""

from wren import Router, RouterConfig
from wren.adapters.cli import request_from_argv, run


class TestRequestFromArgv:
    def test_path_and_args(self) -> None:
        request = request_from_argv(["/profile/1", "--foo=bar", "-v"])
        assert request.path == "/profile/1"
        assert request.query == ""
        assert request.cli_args == {"foo": "bar", "v": True}

    def test_path_after_options(self) -> None:
        assert request_from_argv(["--foo=bar", "/x"]).path == "/x"

    def test_query_suffix(self) -> None:
        request = request_from_argv(["/search?q=wren"])
        assert request.path == "/search"
        assert request.query == "q=wren"

    def test_default_path(self) -> None:
        assert request_from_argv([]).path == "/"
        assert request_from_argv(["-v"], RouterConfig(default_path="/home")).path == "/home"

    def test_bare_query_uses_default_path(self) -> None:
        request = request_from_argv(["?q=1"], RouterConfig(default_path="/home"))
        assert request.path == "/home"
        assert request.query == "q=1"


class TestRun:
    def test_dispatches_argv(self) -> None:
        router = Router({"/profile/:id": lambda params: params})
        outcome = run(router, ["/profile/1", "--foo=bar"])
        assert outcome.result == {"foo": "bar", "id": "1"}

    def test_path_beats_cli(self) -> None:
        router = Router({"/profile/:id": lambda params: params})
        outcome = run(router, ["/profile/1", "--id=cli"])
        assert outcome.result == {"id": "1"}

    def test_reads_sys_argv(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.argv", ["prog", "/home", "--x"])
        router = Router({"/home": lambda params: params})
        assert run(router).result == {"x": True}
