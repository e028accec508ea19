"""Cookie value encryption.

``CookieCipher`` wraps an authenticated-encryption primitive and tags its
output with a short marker derived from the application secret.
"""

from dotcookie.security.encryption import MARKER_LENGTH, CookieCipher

__all__ = ["MARKER_LENGTH", "CookieCipher"]
