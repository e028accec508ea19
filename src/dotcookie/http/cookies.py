"""Cookie parsing and SetCookie serialization.

Consolidates the read side (``parse_cookies``, used by ``Request``) and
the write side (``SetCookie``, used by ``Response``) in one module, along
with the two rules both sides share: which root names are legal and how an
``expires`` option becomes a concrete timestamp.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from email.utils import format_datetime
from urllib.parse import quote, unquote

from dotcookie.errors import ConfigurationError, InvalidName

# Characters that may not appear in a cookie name
_FORBIDDEN_NAME_CHARS: frozenset[str] = frozenset("=,; \t\r\n\x0b\x0c")

_SAMESITE_VALUES: dict[str, str] = {"none": "None", "lax": "Lax", "strict": "Strict"}

_RELATIVE_EXPIRES = re.compile(
    r"^\s*(?P<amount>[+-]?\d+)\s*(?P<unit>second|sec|minute|min|hour|day|week|month|year)s?\s*$",
    re.IGNORECASE,
)

_UNIT_SECONDS: dict[str, int] = {
    "second": 1,
    "sec": 1,
    "minute": 60,
    "min": 60,
    "hour": 3600,
    "day": 86400,
    "week": 7 * 86400,
    "month": 30 * 86400,
    "year": 365 * 86400,
}


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Values are URL-decoded. Returns an empty dict for empty or missing
    headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            cookies[key.strip()] = unquote(value.strip())
    return cookies


def validate_name(name: str) -> str:
    """Return *name* if it is a legal cookie name, else raise ``InvalidName``."""
    if not name:
        raise InvalidName(name, "Cookie name must not be empty.")
    bad = _FORBIDDEN_NAME_CHARS.intersection(name)
    if bad:
        shown = ", ".join(sorted(repr(c) for c in bad))
        raise InvalidName(name, f"Cookie name {name!r} contains forbidden characters: {shown}")
    return name


def normalize_samesite(value: str | None) -> str | None:
    """Title-case a SameSite policy; ``None`` for anything unrecognized."""
    if not value:
        return None
    return _SAMESITE_VALUES.get(value.strip().lower())


def resolve_expires(
    spec: str | int | float | datetime | timedelta | None,
    now: datetime | None = None,
) -> datetime | None:
    """Turn an ``expires`` option into an aware UTC datetime.

    - falsy: ``None`` (session cookie)
    - ``datetime``: used as-is (naive values are taken as UTC)
    - ``timedelta``: relative to *now*
    - ``int``/``float``: absolute Unix timestamp
    - ``str``: relative amount such as ``"+1 day"`` or ``"-1 years"``

    Raises ``ConfigurationError`` for anything else.
    """
    if not spec:
        return None
    current = now or datetime.now(UTC)
    if isinstance(spec, datetime):
        return spec if spec.tzinfo else spec.replace(tzinfo=UTC)
    if isinstance(spec, timedelta):
        return current + spec
    if isinstance(spec, (int, float)) and not isinstance(spec, bool):
        return datetime.fromtimestamp(spec, UTC)
    if isinstance(spec, str):
        match = _RELATIVE_EXPIRES.match(spec)
        if match:
            seconds = int(match["amount"]) * _UNIT_SECONDS[match["unit"].lower()]
            return current + timedelta(seconds=seconds)
    msg = f"Cannot interpret cookie expiry {spec!r}."
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive attached to a Response."""

    name: str
    value: str
    expires: datetime | None = None
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: str | None = None

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={quote(self.value, safe='')}"]
        if self.expires is not None:
            parts.append(f"Expires={format_datetime(self.expires.astimezone(UTC), usegmt=True)}")
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        samesite = normalize_samesite(self.samesite)
        if samesite:
            parts.append(f"SameSite={samesite}")
        return "; ".join(parts)
