"""dotcookie exception hierarchy.

Shared by the jar, the cipher and the header helpers so callers can catch
one base type around any cookie operation.
"""


class DotCookieError(Exception):
    """Base for all dotcookie-specific errors."""


class ConfigurationError(DotCookieError):
    """Raised when cookie configuration is invalid.

    Typically raised when a jar or cipher is built with a secret that is
    too short, or when an ``expires`` option cannot be interpreted.
    """


class InvalidName(DotCookieError, ValueError):  # noqa: N818 — names the rule it enforces
    """The root cookie name is empty or contains a forbidden character.

    Raised by ``CookieJar.write()`` before anything is emitted.
    """

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        super().__init__(detail or f"Invalid cookie name: {name!r}")


class CryptoFailure(DotCookieError):  # noqa: N818 — conventional name for cipher rejections
    """The encryption primitive rejected its input.

    Wrong key, tampered or truncated ciphertext. Always chained to the
    underlying error with ``raise ... from``.
    """
