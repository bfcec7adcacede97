"""Security headers added to every response."""

from collections.abc import Awaitable, Callable
from typing import Literal, TypeAlias

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from papercontest.core.constants import DEFAULT_HSTS_MAX_AGE

ResourcePolicy: TypeAlias = Literal["same-origin", "same-site", "cross-origin"]


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add the standard hardening headers to all responses.

    Uploaded papers and competition posters are fetched by the browser
    client from another origin, so ``Cross-Origin-Resource-Policy`` defaults
    to ``cross-origin``.

    Args:
        app: The ASGI application to wrap.
        hsts_enabled: Whether to include the HSTS header.
        hsts_max_age: Max age for HSTS in seconds.
        hsts_include_subdomains: Whether to include subdomains in HSTS.
        resource_policy: Value of ``Cross-Origin-Resource-Policy``.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        hsts_enabled: bool = True,
        hsts_max_age: int = DEFAULT_HSTS_MAX_AGE,
        hsts_include_subdomains: bool = True,
        resource_policy: ResourcePolicy = "cross-origin",
    ) -> None:
        super().__init__(app)
        self.static_headers = {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "no-referrer",
            "Cross-Origin-Resource-Policy": resource_policy,
        }
        if hsts_enabled:
            hsts = f"max-age={hsts_max_age}"
            if hsts_include_subdomains:
                hsts += "; includeSubDomains"
            self.static_headers["Strict-Transport-Security"] = hsts

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Add security headers to the response.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or route handler.

        Returns:
            Response: The HTTP response with security headers added.
        """
        response = await call_next(request)
        response.headers.update(self.static_headers)
        return response
