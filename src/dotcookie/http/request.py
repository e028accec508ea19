"""Immutable HTTP request metadata.

Only what cookie handling needs from the inbound side: the received
cookies, the host the client addressed, the scheme, and the mount point of
the application. Cookies are parsed once at creation time (in
``from_asgi``) and stored as a frozen field.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from dotcookie.http.cookies import parse_cookies


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable view of the request a cookie jar serves.

    ``headers`` keys are lower-case. ``cookies`` preserves the case of the
    names the client sent.
    """

    method: str = "GET"
    path: str = "/"
    scheme: str = "http"
    headers: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    server: tuple[str, int] | None = None
    root_path: str = ""

    @property
    def host(self) -> str | None:
        """Host name from the ``Host`` header, without port.

        Falls back to the server address when the header is missing.
        """
        value = self.headers.get("host")
        if value:
            if value.startswith("["):
                # IPv6 literal, e.g. "[::1]:8000"
                return value.partition("]")[0] + "]"
            return value.rsplit(":", 1)[0] if value.count(":") == 1 else value
        if self.server:
            return self.server[0]
        return None

    @property
    def is_secure(self) -> bool:
        return self.scheme in ("https", "wss")

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        headers: dict[str, str] = {}
        for name, value in scope.get("headers", ()):
            key = name.decode("latin-1").lower()
            text = value.decode("latin-1")
            # Repeated Cookie headers are joined the way HTTP/2 splits them
            if key == "cookie" and key in headers:
                headers[key] = f"{headers[key]}; {text}"
            elif key not in headers:
                headers[key] = text
        server = scope.get("server")
        return cls(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/"),
            scheme=scope.get("scheme", "http"),
            headers=headers,
            cookies=parse_cookies(headers.get("cookie", "")),
            server=tuple(server) if server else None,
            root_path=scope.get("root_path", ""),
        )
