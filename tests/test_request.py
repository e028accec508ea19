"""Tests for dotcookie.http.request — Request built from an ASGI scope."""

import pytest

from dotcookie.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST", path="/users", root_path="/app"))

        assert req.method == "POST"
        assert req.path == "/users"
        assert req.root_path == "/app"
        assert req.server == ("localhost", 8000)

    def test_cookies_parsed(self) -> None:
        scope = _make_scope(headers=[(b"cookie", b"session=abc; theme=dark")])
        req = Request.from_asgi(scope)

        assert req.cookies == {"session": "abc", "theme": "dark"}

    def test_repeated_cookie_headers_joined(self) -> None:
        scope = _make_scope(headers=[(b"cookie", b"a=1"), (b"Cookie", b"b=2")])
        req = Request.from_asgi(scope)

        assert req.cookies == {"a": "1", "b": "2"}

    def test_no_cookies(self) -> None:
        assert Request.from_asgi(_make_scope()).cookies == {}

    def test_headers_lower_cased(self) -> None:
        scope = _make_scope(headers=[(b"Host", b"example.com")])
        assert Request.from_asgi(scope).headers == {"host": "example.com"}

    def test_scheme(self) -> None:
        req = Request.from_asgi(_make_scope(scheme="https"))
        assert req.scheme == "https"
        assert req.is_secure is True


class TestHost:
    def test_from_host_header(self) -> None:
        assert Request(headers={"host": "www.example.com"}).host == "www.example.com"

    def test_port_stripped(self) -> None:
        assert Request(headers={"host": "example.com:8443"}).host == "example.com"

    def test_ipv6_literal(self) -> None:
        assert Request(headers={"host": "[::1]:8000"}).host == "[::1]"

    def test_falls_back_to_server(self) -> None:
        assert Request(server=("10.0.0.1", 80)).host == "10.0.0.1"

    def test_unknown(self) -> None:
        assert Request().host is None


class TestImmutability:
    def test_frozen(self) -> None:
        req = Request()
        with pytest.raises(AttributeError):
            req.path = "/other"  # type: ignore[misc]
