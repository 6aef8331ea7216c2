"""
Practice CMS Backend — Admin Credential Gate
============================================

What:  Refuses every /api/admin/* request that does not carry
       `Authorization: Bearer <ADMIN_API_TOKEN>`.
Why:   Admin routes write content that is served verbatim to visitors
       (custom code snippets included), so nothing under /api/admin/ may
       be reachable anonymously.
How:   Constant-time comparison against the configured token. With no token
       configured the gate stays closed: every admin request gets 401 and
       startup logs a configuration error.

Public routes (/api/faq, /api/config, /health, ...) are never gated.
"""

import hmac
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from practice_cms.config import settings
from practice_cms.exceptions import AuthenticationError
from practice_cms.middleware.request_id import client_ip_of, request_id_var

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/api/admin"


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def token_matches(header_value: str, expected: str) -> bool:
    """True when `header_value` is `Bearer <expected>` and a token is configured."""
    if not expected:
        return False
    scheme, _, supplied = header_value.partition(" ")
    if scheme.lower() != "bearer" or not supplied:
        return False
    return hmac.compare_digest(supplied.strip().encode(), expected.encode())


class AdminAuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not is_admin_path(request.url.path):
            return await call_next(request)

        if token_matches(request.headers.get("Authorization", ""), settings.admin_api_token):
            return await call_next(request)

        exc = AuthenticationError()
        logger.warning(
            "Rejected admin request %s %s from %s",
            request.method,
            request.url.path,
            client_ip_of(request),
        )
        return JSONResponse(
            status_code=401,
            content={
                "error": "authentication_required",
                "message": exc.message,
                "request_id": request_id_var.get(""),
            },
            headers={"WWW-Authenticate": "Bearer"},
        )
