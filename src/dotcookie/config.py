"""Cookie configuration.

``CookieConfig`` is a frozen dataclass: the transport attributes applied to
every cookie a jar emits. ``CookieSettings`` is the mutable key/value
surface on top of it. Each ``set`` swaps in a new ``CookieConfig``, so a
config handed to a ``SetCookie`` never changes underneath it.

    settings = CookieSettings()
    settings.set("secure", True)
    settings.set({"path": "/app", "sameSite": "strict"})
    settings.get("path")           # "/app"
    settings.get("unknown", 42)    # 42
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime, timedelta
from typing import Any, TypeAlias

ExpiresSpec: TypeAlias = str | int | float | datetime | timedelta | None


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """Transport attributes for emitted cookies.

    ``expires`` falsy means a session cookie. ``path`` and ``domain`` left
    empty are filled from the request when a jar is built from one.
    """

    # Encryption key; None leaves values in plain text even when asked to encrypt
    key: str | None = None

    # Lifetime
    expires: ExpiresSpec = None
    max_age: int | None = None

    # Scope
    path: str = ""
    domain: str = ""

    # Flags
    secure: bool = False
    http_only: bool = False
    same_site: str | None = None


_OPTION_NAMES: frozenset[str] = frozenset(f.name for f in fields(CookieConfig))

# camelCase spellings accepted for compatibility with header-style option names
_ALIASES: dict[str, str] = {
    "maxAge": "max_age",
    "httpOnly": "http_only",
    "sameSite": "same_site",
    "expire": "expires",
}


def _option_name(key: str) -> str | None:
    name = _ALIASES.get(key, key)
    return name if name in _OPTION_NAMES else None


class CookieSettings:
    """Mutable view over a ``CookieConfig``.

    Unknown keys are ignored on ``set``. ``get`` returns *default* for
    unknown keys and for options whose value is ``None``.
    """

    __slots__ = ("_config",)

    def __init__(self, config: CookieConfig | None = None) -> None:
        self._config = config or CookieConfig()

    @property
    def config(self) -> CookieConfig:
        return self._config

    def set(self, key: str | Mapping[str, Any], value: Any = None) -> CookieSettings:
        """Set one option, or several from a mapping. Returns ``self``."""
        items = key.items() if isinstance(key, Mapping) else [(key, value)]
        changes: dict[str, Any] = {}
        for raw_key, raw_value in items:
            name = _option_name(raw_key) if isinstance(raw_key, str) else None
            if name is not None:
                changes[name] = raw_value
        if changes:
            self._config = replace(self._config, **changes)
        return self

    def get(self, key: str | None = None, default: Any = None) -> Any:
        """Return one option, or every option as a dict when *key* is omitted."""
        if key is None:
            return asdict(self._config)
        name = _option_name(key)
        if name is None:
            return default
        value = getattr(self._config, name)
        return default if value is None else value
