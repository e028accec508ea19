"""dotcookie — dotted, optionally encrypted HTTP cookie values.

Several values share one cookie through dotted names, and any cookie can be
encrypted on write and recognized on read by a marker prefix.

Basic usage::

    from dotcookie import CookieJar, Request, Response

    request = Request.from_asgi(scope)
    jar = CookieJar.from_request(request, secret=app_secret)
    jar.set_config("key", cookie_key)

    jar.write("prefs.theme", "dark")
    jar.write("session.token", token, encrypt=True)
    theme = jar.read("prefs.theme")

    response = jar.apply(Response("ok"))
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "CookieCipher",
    "CookieConfig",
    "CookieJar",
    "CookieSettings",
    "CryptoFailure",
    "DotCookieError",
    "InvalidName",
    "Request",
    "Response",
    "SetCookie",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import dotcookie`` free of the ``cryptography`` import until a
    jar or cipher is actually used.
    """
    if name == "CookieJar":
        from dotcookie.jar import CookieJar

        return CookieJar

    if name == "CookieCipher":
        from dotcookie.security.encryption import CookieCipher

        return CookieCipher

    if name in ("CookieConfig", "CookieSettings"):
        from dotcookie import config as _config

        return getattr(_config, name)

    if name == "Request":
        from dotcookie.http.request import Request

        return Request

    if name == "Response":
        from dotcookie.http.response import Response

        return Response

    if name == "SetCookie":
        from dotcookie.http.cookies import SetCookie

        return SetCookie

    if name in ("ConfigurationError", "CryptoFailure", "DotCookieError", "InvalidName"):
        from dotcookie import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
