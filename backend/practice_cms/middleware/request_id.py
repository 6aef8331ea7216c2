"""
Practice CMS Backend — Request ID Middleware
============================================

What:  Assigns a correlation ID to each request and echoes it in the response.
Why:   Every log line of one request (access log, audit log, error handler)
       carries the same ID, and the admin UI can show it in error toasts.
How:   Reuses the client's X-Request-ID when present, otherwise generates a
       short UUID. Stores it, together with the client IP, in ContextVars.
When:  Outermost application middleware, so everything downstream sees it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
client_ip_var: ContextVar[str] = ContextVar("client_ip", default="")


def client_ip_of(request: Request) -> str:
    """Client address as seen by the server (the proxy's, behind a proxy)."""
    return request.client.host if request.client else "unknown"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the client, or generate 8 hex chars
        2. Store it (and the client IP) in ContextVars for loggers
        3. Expose it on request.state for route handlers
        4. Return it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        client_ip_var.set(client_ip_of(request))
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
