"""Security headers middleware (raw ASGI).

JSON and PDF responses only, so the content security policy forbids
everything; the interactive docs pages are exempt.
"""

from collections.abc import Callable

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}

EXEMPT_PATH_PREFIXES = ("/docs", "/redoc")


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Set security headers on HTTP responses unless the route already set them."""
    resolved = headers if headers is not None else DEFAULT_HEADERS
    header_list = [(k.lower().encode(), v.encode()) for k, v in resolved.items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("path", "").startswith(EXEMPT_PATH_PREFIXES):
            await app(scope, receive, send)
            return

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                existing = list(message.get("headers", []))
                seen = {name.lower() for name, _ in existing}
                existing.extend(h for h in header_list if h[0] not in seen)
                message["headers"] = existing
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
