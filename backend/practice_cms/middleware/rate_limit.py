"""
Practice CMS Backend — Admin Rate Limiting Middleware
=====================================================

What:  Per-IP sliding window limit on admin mutations
       (POST/PUT/DELETE under /api/admin/).
Why:   Public reads are cheap and cacheable, but every admin write is a
       transaction, and a runaway script or a leaked token could hammer
       the database with them.
How:   In-memory list of request timestamps per IP:
       1. Drop timestamps older than the window
       2. If the remaining count is at the limit, answer 429 + Retry-After
       3. Otherwise record this request and let it through

Deployment note:
    State lives in the process. With several workers each one enforces its
    own window, so the effective limit is workers × admin_rate_limit_requests.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from practice_cms.config import settings
from practice_cms.exceptions import RateLimitExceededError
from practice_cms.middleware.request_id import client_ip_of, request_id_var

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/api/admin/"
READ_METHODS = {"GET", "HEAD", "OPTIONS"}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding window limiter for admin writes.

    Configuration (from settings):
        admin_rate_limit_requests: max mutations per window (default 300)
        admin_rate_limit_window:   window length in seconds (default 60)
    """

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._seen = 0

    @staticmethod
    def applies_to(request: Request) -> bool:
        return (
            request.url.path.startswith(ADMIN_PREFIX)
            and request.method not in READ_METHODS
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.applies_to(request):
            return await call_next(request)

        client_ip = client_ip_of(request)
        window = settings.admin_rate_limit_window
        now = time.time()
        window_start = now - window

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= settings.admin_rate_limit_requests:
            retry_after = int(timestamps[0] + window - now) + 1
            exc = RateLimitExceededError(retry_after=retry_after)
            logger.warning(
                "Admin rate limit exceeded for IP %s: %d mutations in %ds window",
                client_ip,
                len(timestamps),
                window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)

        self._seen += 1
        if self._seen % 1000 == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Forget IPs with no mutation inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
