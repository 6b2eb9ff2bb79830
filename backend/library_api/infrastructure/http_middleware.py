"""HTTP Middleware — security headers, CORS preflight shaping and rate limiting.

Invariants:
    - Every response carries SECURITY_HEADERS (including error and 429 responses)
    - A successful CORS preflight answers 204 with an empty body
    - Health probes and preflights never consume rate-limit budget
"""

import logging

from fastapi import Request
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response

from library_api.core.errors import RateLimitExceededError
from library_api.infrastructure.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}

RATE_LIMIT_EXEMPT_PATHS = frozenset({"/", "/healthz"})


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach hardening headers to every response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class PreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose accepted preflights return 204 No Content."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            name: value for name, value in response.headers.items()
            if name not in ("content-length", "content-type")
        }
        return Response(status_code=204, headers=headers)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Refuse requests over the per-client budget with 429."""

    def __init__(self, app, limiter: SlidingWindowRateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next):
        if self._is_exempt(request):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        retry_after = self.limiter.hit(client)
        if retry_after is None:
            return await call_next(request)

        error = RateLimitExceededError(retry_after)
        logger.warning(
            f"Rate limit hit for {client} on {request.method} {request.url.path}",
            extra={"error_code": error.code, "client": client},
        )
        return JSONResponse(
            status_code=error.http_status,
            content=error.to_response(),
            headers={"Retry-After": str(retry_after)},
        )

    def _is_exempt(self, request: Request) -> bool:
        if not self.limiter.enabled:
            return True
        if request.method == "OPTIONS":
            return True
        return request.url.path in RATE_LIMIT_EXEMPT_PATHS
