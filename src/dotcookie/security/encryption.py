"""Marker-tagged cookie encryption.

Encrypted cookie values look like::

    <marker><fernet token>

The marker is a fixed slice of the application secret. It is not
authenticated: it only lets a reader tell "encrypted by us" apart from
plain text without any other metadata. The Fernet token that follows is
URL-safe base64 and carries its own HMAC, so tampering surfaces as
``CryptoFailure`` on decrypt.

Keys are stretched to Fernet's 32-byte format with ``itsdangerous``'s HMAC
key derivation, salted per call when an ``hmac_salt`` is given.

Usage::

    cipher = CookieCipher(secret="app-secret-value", key="cookie-key")
    token = cipher.encrypt("hello")
    assert cipher.looks_encrypted(token)
    assert cipher.decrypt(token) == "hello"
"""

from __future__ import annotations

import base64
import hashlib
import logging
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken
from itsdangerous import Signer

from dotcookie.errors import ConfigurationError, CryptoFailure

_log = logging.getLogger("dotcookie.security")

MARKER_LENGTH = 9
DEFAULT_SALT = "dotcookie.encryption"


@lru_cache(maxsize=32)
def _fernet(key: str, salt: str) -> Fernet:
    signer = Signer(key, salt=salt, key_derivation="hmac", digest_method=hashlib.sha256)
    return Fernet(base64.urlsafe_b64encode(signer.derive_key()))


def derive_marker(secret: str) -> str:
    """Return the encryption marker for *secret*.

    Characters ``[1:10]`` of the secret. Raises ``ConfigurationError`` when
    the secret is too short to yield a full-length marker.
    """
    marker = secret[1 : 1 + MARKER_LENGTH]
    if len(marker) != MARKER_LENGTH:
        msg = f"Cookie secret must be at least {MARKER_LENGTH + 1} characters long."
        raise ConfigurationError(msg)
    return marker


class CookieCipher:
    """Encrypt, decrypt and classify cookie values.

    With no *key*, ``encrypt`` and ``decrypt`` are the identity: encryption
    is opt-in through key presence.
    """

    __slots__ = ("_key", "_marker")

    def __init__(self, secret: str, key: str | None = None) -> None:
        self._marker = derive_marker(secret)
        self._key = key or None

    @classmethod
    def from_secret(cls, secret: str) -> CookieCipher:
        """Build a cipher that also uses *secret* as its encryption key."""
        return cls(secret, key=secret)

    @property
    def marker(self) -> str:
        return self._marker

    @property
    def enabled(self) -> bool:
        """True when a key is configured."""
        return self._key is not None

    def looks_encrypted(self, raw: str | None) -> bool:
        """True if *raw* starts with this cipher's marker.

        A heuristic: plain text that happens to start with the marker is
        misclassified.
        """
        return bool(raw) and raw.startswith(self._marker)

    def encrypt(self, plaintext: str, hmac_salt: str | None = None) -> str:
        """Encrypt *plaintext* and prepend the marker."""
        if self._key is None:
            return plaintext
        try:
            token = _fernet(self._key, hmac_salt or DEFAULT_SALT).encrypt(plaintext.encode("utf-8"))
        except (TypeError, ValueError) as exc:
            raise CryptoFailure("Cookie value could not be encrypted") from exc
        return self._marker + token.decode("ascii")

    def decrypt(self, tagged: str, hmac_salt: str | None = None) -> str:
        """Strip the marker from *tagged* and decrypt the remainder.

        Callers check ``looks_encrypted(tagged)`` first; the marker is
        removed by length alone.
        """
        if self._key is None:
            return tagged
        token = tagged[len(self._marker) :]
        try:
            plaintext = _fernet(self._key, hmac_salt or DEFAULT_SALT).decrypt(token)
            return plaintext.decode("utf-8")
        except (InvalidToken, TypeError, ValueError) as exc:
            _log.warning("Cookie decryption failed: %s", type(exc).__name__)
            raise CryptoFailure("Cookie value could not be decrypted") from exc
