"""
Practice CMS Backend — Request Logging Middleware
=================================================

What:  One access log line per HTTP request: method, path, status, duration,
       request ID and client IP.
Why:   The site is mostly reads of small JSON lists; the access log is how
       slow queries and failing admin saves show up.
When:  Inside RequestIDMiddleware, so the correlation ID is already set.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Not logged: request bodies (custom code snippets and config values can be
large) and the Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from practice_cms.middleware.request_id import client_ip_of, request_id_var

logger = logging.getLogger("practice_cms.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    # Polled every few seconds by Docker and load balancers
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        client_ip = client_ip_of(request)
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
