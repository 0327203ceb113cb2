"""CORS, API token authentication, rate limiting, and security headers middleware."""

import time
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from eligibility_api.core.config import Settings

_DEFAULT_TRUSTED_HEADERS = ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"]

# Checked in order; the second form is what CGI-style proxies forward
API_TOKEN_HEADERS = ("API-TOKEN", "HTTP_API_TOKEN")


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Extract the real client IP from proxy headers or direct connection.

    Checks headers in priority order. For X-Forwarded-For, uses the
    leftmost (client-supplied) IP. Falls back to request.client.host.

    Args:
        request: The incoming Starlette request.
        trusted_headers: Ordered list of header names to check.
            Defaults to ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"].

    Returns:
        The client IP address string, or "unknown" if not determinable.
    """
    headers = trusted_headers if trusted_headers is not None else _DEFAULT_TRUSTED_HEADERS

    for header in headers:
        value = request.headers.get(header, "").strip()
        if not value:
            continue
        if header.lower() == "x-forwarded-for":
            return value.split(",")[0].strip()
        return value

    if request.client:
        return request.client.host
    return "unknown"


def extract_api_token(request: Request) -> str | None:
    """Return the first non-blank API token header value, if any."""
    for header in API_TOKEN_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value
    return None


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    kwargs: dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    app.add_middleware(CORSMiddleware, **kwargs)


class ApiTokenMiddleware(BaseHTTPMiddleware):
    """Require a known API token on every non-public path.

    Missing tokens get 401, unknown tokens 403, both as
    ``{"error": ..., "status": ...}`` JSON bodies.
    """

    def __init__(
        self,
        app: ASGIApp,
        tokens: list[str],
        public_paths: list[str] | None = None,
        enabled: bool = True,
    ) -> None:
        super().__init__(app)
        self.tokens = frozenset(tokens)
        self.public_paths = tuple(public_paths or ())
        self.enabled = enabled

    def is_public(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.public_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Validate the API token and process the request.

        Args:
            request: The incoming request.
            call_next: The next middleware/handler.

        Returns:
            Response, or 401/403 when the token is missing or unknown.
        """
        path = request.url.path
        if not self.enabled or request.method == "OPTIONS" or self.is_public(path):
            return await call_next(request)

        token = extract_api_token(request)
        if token is None:
            logger.warning(f"Missing API token for request: {path}")
            return _error_response(401, "Must provide API token")
        if token not in self.tokens:
            logger.warning(f"Invalid API token attempted for request: {path}")
            return _error_response(403, "Invalid API token")

        return await call_next(request)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "status": str(status_code)})


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Add security headers to the response.

        Args:
            request: The incoming request.
            call_next: The next middleware/handler.

        Returns:
            Response with security headers.
        """
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Simple in-memory rate limiting middleware.

    Limits requests per IP address with a sliding window approach.
    Uses proxy headers to identify real client IPs behind reverse proxies.
    """

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 60,
        trusted_proxy_headers: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers
        self._request_counts: dict[str, list[float]] = {}

    def _prune(self, window_start: float) -> None:
        """Drop clients whose every request falls before the window."""
        stale = [ip for ip, times in self._request_counts.items() if not times or times[-1] <= window_start]
        for ip in stale:
            del self._request_counts[ip]

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = get_client_ip(request, self.trusted_proxy_headers)
        now = time.time()
        window_start = now - 60.0

        self._prune(window_start)
        recent = [t for t in self._request_counts.get(client_ip, []) if t > window_start]

        if len(recent) >= self.requests_per_minute:
            self._request_counts[client_ip] = recent
            return Response(
                content='{"detail":"Rate limit exceeded"}',
                status_code=429,
                media_type="application/json",
            )

        recent.append(now)
        self._request_counts[client_ip] = recent
        return await call_next(request)
