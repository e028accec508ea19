"""Cookie jar: read, write, delete and encrypt dotted cookie values.

One ``CookieJar`` serves one request. It starts from the cookies the
client sent, and every ``write``/``delete`` both updates that working copy
(so later reads in the same request see the change) and records a
``SetCookie`` directive. ``apply()`` attaches the directives to a response.

Dotted names address values inside a single root cookie::

    jar = CookieJar.from_request(request, secret=app_secret)
    jar.write("prefs.theme", "dark")
    jar.write("prefs.lang", "en")      # cookie "prefs" = {"theme":"dark","lang":"en"}
    jar.read("prefs.theme")            # "dark"
    jar.read("prefs")                  # {"theme": "dark", "lang": "en"}
    response = jar.apply(response)

Encrypted values carry a marker prefix (see ``dotcookie.security``), so
``read`` can tell them apart from plain text without extra bookkeeping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from dotcookie.config import CookieConfig, CookieSettings
from dotcookie.http.cookies import SetCookie, resolve_expires, validate_name
from dotcookie.http.request import Request
from dotcookie.http.response import Response
from dotcookie.paths import get_at, has_at, insert_at, remove_at, split
from dotcookie.security.encryption import CookieCipher, derive_marker
from dotcookie.serializer import StructuredValue, decode, serialize, try_deserialize

_log = logging.getLogger("dotcookie.jar")

# Expiry used for deletions
_DELETE_OFFSET = timedelta(days=365)


class CookieJar:
    """Request-scoped cookie access with dotted names and opt-in encryption.

    Args:
        cookies: Cookies received with the request (root name -> raw value).
        secret: Application secret; the encryption marker is derived from it.
        config: Transport defaults. ``path``/``domain`` left empty are filled
            from *root_path* and *host*.
        host: Host the request addressed, for the default cookie domain.
        scheme: Request scheme.
        root_path: Mount point of the application, for the default path.
    """

    __slots__ = ("_cookies", "_emitted", "_host", "_marker", "_scheme", "_secret", "_settings")

    def __init__(
        self,
        cookies: Mapping[str, str] | None = None,
        *,
        secret: str,
        config: CookieConfig | None = None,
        host: str | None = None,
        scheme: str = "http",
        root_path: str = "",
    ) -> None:
        self._secret = secret
        self._marker = derive_marker(secret)
        self._cookies: dict[str, str] = dict(cookies or {})
        self._emitted: list[SetCookie] = []
        self._host = host
        self._scheme = scheme
        self._settings = CookieSettings(config)

        if not self._settings.get("path"):
            self._settings.set("path", root_path or "/")
        if not self._settings.get("domain") and host:
            self._settings.set("domain", self.cookie_domain())

    @classmethod
    def from_request(
        cls,
        request: Request,
        *,
        secret: str,
        config: CookieConfig | None = None,
    ) -> CookieJar:
        """Build a jar over *request*'s cookies, host and mount point."""
        return cls(
            request.cookies,
            secret=secret,
            config=config,
            host=request.host,
            scheme=request.scheme,
            root_path=request.root_path,
        )

    # -- Configuration --

    @property
    def config(self) -> CookieConfig:
        return self._settings.config

    @property
    def cipher(self) -> CookieCipher:
        """Cipher for the currently configured key."""
        return CookieCipher(self._secret, key=self._settings.get("key"))

    def set_config(self, key: str | Mapping[str, Any], value: Any = None) -> CookieJar:
        """Set one option or several (mapping). Unknown keys are ignored."""
        self._settings.set(key, value)
        return self

    def get_config(self, key: str | None = None, default: Any = None) -> Any:
        """Return one option (or *default*), or all options as a dict."""
        return self._settings.get(key, default)

    # -- Emitted directives --

    @property
    def emitted(self) -> tuple[SetCookie, ...]:
        """Set-Cookie directives recorded so far, oldest first."""
        return tuple(self._emitted)

    def apply(self, response: Response) -> Response:
        """Return *response* with every recorded directive attached."""
        return response.with_cookies(self._emitted)

    # -- Public operations --

    def list(self, decrypt: bool = False) -> dict[str, Any]:
        """Return every root cookie mapped to its value.

        With *decrypt*, encrypted values are decrypted and decoded; other
        values are returned as received.
        """
        cookies: dict[str, Any] = {}
        for name, raw in self._cookies.items():
            if decrypt and self._looks_encrypted(raw):
                cookies[name] = self._raw_value(name, decrypt=True)
            else:
                cookies[name] = raw
        return cookies

    def check(self, name: str) -> bool:
        """True if ``read(name)`` finds a value. Decrypts tagged roots."""
        root = split(name).root
        decrypt = self._looks_encrypted(self._cookies.get(root))
        return self.read(name, decrypt) is not None

    def read(self, name: str, decrypt: bool = False) -> Any:
        """Return the value stored under *name*, or ``None``.

        For a dotted name the nested path is tried first, then a literal
        key equal to the full name. A flat name returns the entry with that
        literal key if the root's structure has one, else the whole value.
        """
        path = split(name)
        if path.root not in self._cookies:
            return None

        value = self._raw_value(path.root, decrypt)
        if not isinstance(value, (dict, list)):
            return value
        if path.is_nested:
            if has_at(value, path.subpath):
                return get_at(value, path.subpath)
            return get_at(value, [name])
        if has_at(value, [name]):
            return get_at(value, [name])
        return value

    def write(self, name: str, value: Any, encrypt: bool = False) -> None:
        """Store *value* under *name*.

        A dotted name merges *value* into the root's structure. A flat
        name over an existing structure re-serializes that structure;
        otherwise *value* replaces the cookie.

        Raises ``InvalidName`` before anything is emitted when the root
        name is illegal.
        """
        path = split(name)
        validate_name(path.root)

        existing = self._structure(path.root)
        if path.is_nested:
            merged = insert_at(existing if existing is not None else {}, path.subpath, value)
            payload = serialize(merged)
        elif existing is not None:
            payload = serialize(existing)
        else:
            payload = serialize(value)

        if encrypt:
            payload = self.cipher.encrypt(payload)

        self._emit(path.root, payload, self.config)
        self._cookies[path.root] = payload

    def delete(self, name: str) -> None:
        """Expire the whole root cookie of *name*. No-op when absent."""
        root = split(name).root
        if root not in self._cookies:
            return
        expired = datetime.now(UTC) - _DELETE_OFFSET
        self._emit(root, "", self.config, expires=expired, max_age=0)
        del self._cookies[root]
        _log.debug("Deleted cookie %s", root)

    def remove(self, name: str) -> None:
        """Remove one nested value and rewrite the rest of its root cookie.

        Keeps the root's encryption state. Empty parent mappings are kept.
        Flat or absent cookies are left alone.
        """
        path = split(name)
        raw = self._cookies.get(path.root)
        if raw is None or not path.is_nested:
            return
        structure = self._structure(path.root)
        if structure is None:
            return

        remaining = remove_at(structure, path.subpath)
        payload = serialize(remaining)
        if self._looks_encrypted(raw):
            payload = self.cipher.encrypt(payload)
        self._emit(path.root, payload, self.config)
        self._cookies[path.root] = payload

    def cookie_domain(self) -> str:
        """Default cookie domain: ``"." + host`` without ``www.``.

        ``www.example.com`` and ``example.com`` both give ``.example.com``.
        """
        host = self._host or ""
        return "." + host.replace("www.", "")

    # -- Internals --

    def _looks_encrypted(self, raw: str | None) -> bool:
        return bool(raw) and raw.startswith(self._marker)

    def _raw_value(self, root: str, decrypt: bool = True) -> Any:
        """Load and decode the value of *root*, decrypting tagged values if asked."""
        raw = self._cookies.get(root)
        if raw is None:
            return None
        if decrypt and self._looks_encrypted(raw):
            raw = self.cipher.decrypt(raw)
        return decode(raw)

    def _structure(self, root: str) -> StructuredValue | None:
        """Decrypted structure stored under *root*, or ``None`` for scalars."""
        raw = self._cookies.get(root)
        if raw is None:
            return None
        if self._looks_encrypted(raw):
            raw = self.cipher.decrypt(raw)
        return try_deserialize(raw)

    def _emit(
        self,
        name: str,
        value: str,
        config: CookieConfig,
        *,
        expires: datetime | None = None,
        max_age: int | None = None,
    ) -> None:
        cookie = SetCookie(
            name=name,
            value=value,
            expires=expires if expires is not None else resolve_expires(config.expires),
            max_age=max_age if max_age is not None else config.max_age,
            path=config.path,
            domain=config.domain or None,
            secure=config.secure,
            httponly=config.http_only,
            samesite=config.same_site,
        )
        self._emitted.append(cookie)
        _log.debug("Set cookie %s (path=%s, domain=%s)", name, cookie.path, cookie.domain)
