"""HTTP response carrying cookie directives.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design. Only the parts of a response that cookie
handling touches are modelled here: status, extra headers, and the ordered
``SetCookie`` directives rendered into ``Set-Cookie`` headers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from dotcookie.http.cookies import SetCookie


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_cookie(self, cookie: SetCookie) -> Response:
        """Return a new Response with an additional Set-Cookie."""
        return replace(self, cookies=(*self.cookies, cookie))

    def with_cookies(self, cookies: Iterable[SetCookie]) -> Response:
        """Return a new Response with several Set-Cookie directives appended."""
        return replace(self, cookies=(*self.cookies, *cookies))

    def cookie_headers(self) -> list[tuple[str, str]]:
        """Render every directive as a ``("Set-Cookie", value)`` pair, in order."""
        return [("Set-Cookie", cookie.to_header_value()) for cookie in self.cookies]

    def header_pairs(self) -> list[tuple[str, str]]:
        """All headers including rendered cookies, ready for the transport."""
        return [*self.headers, *self.cookie_headers()]
