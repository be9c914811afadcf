"""Tests for wren.http.response — Response construction and chaining."""

import json

import pytest

from wren.http.response import Response


class TestChaining:
    def test_with_status(self) -> None:
        original = Response("hi")
        changed = original.with_status(201)
        assert changed.status == 201
        assert original.status == 200

    def test_with_header(self) -> None:
        response = Response("hi").with_header("X-A", "1").with_header("X-B", "2")
        assert response.headers == (("X-A", "1"), ("X-B", "2"))

    def test_with_headers(self) -> None:
        response = Response("hi").with_headers({"X-A": "1", "X-B": "2"})
        assert dict(response.headers) == {"X-A": "1", "X-B": "2"}

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response("hi").status = 500  # type: ignore[misc]


class TestBody:
    def test_str_body_bytes(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()

    def test_bytes_text(self) -> None:
        assert Response(b"abc").text == "abc"


class TestFromResult:
    def test_response_passthrough(self) -> None:
        response = Response("x", status=202)
        assert Response.from_result(response) is response

    def test_str(self) -> None:
        response = Response.from_result("<p>hi</p>")
        assert response.content_type.startswith("text/html")
        assert response.body == "<p>hi</p>"

    def test_bytes(self) -> None:
        response = Response.from_result(b"\x00")
        assert response.content_type == "application/octet-stream"

    def test_mapping_is_json(self) -> None:
        response = Response.from_result({"a": 1}, json_indent=None)
        assert response.content_type == "application/json"
        assert response.body == '{"a": 1}'

    def test_none_is_json_null(self) -> None:
        assert Response.from_result(None).body == "null"

    def test_indent(self) -> None:
        assert Response.from_result([1], json_indent=2).body == "[\n  1\n]"


class TestJson:
    def test_non_serializable_uses_str(self) -> None:
        class Thing:
            def __str__(self) -> str:
                return "thing"

        assert json.loads(Response.json({"t": Thing()}).body) == {"t": "thing"}

    def test_status(self) -> None:
        assert Response.json({}, status=201).status == 201


class TestJsonp:
    def test_wraps_callback(self) -> None:
        response = Response.jsonp({"a": 1}, "cb")
        assert response.body == 'cb({"a": 1});'
        assert response.content_type.startswith("text/javascript")

    def test_default_callback(self) -> None:
        assert Response.jsonp([]).body == "callback([]);"

    def test_escapes_line_separators(self) -> None:
        body = Response.jsonp({"s": "a\u2028b\u2029c"}).body
        assert "\u2028" not in body
        assert "\u2029" not in body
        assert "\\u2028" in body
        assert "\\u2029" in body


def test_text_error() -> None:
    response = Response.text_error(404, "Not Found")
    assert response.status == 404
    assert response.content_type.startswith("text/plain")
    assert response.text == "Not Found"
