"""
Practice CMS Backend — Middleware Tests
=======================================

What:  Admin token matching and the admin mutation rate limiter.
How:   The limiter runs inside a throwaway Starlette app so its in-memory
       window starts empty and limits can be lowered per test.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from practice_cms.config import settings
from practice_cms.middleware.admin_auth import is_admin_path, token_matches
from practice_cms.middleware.rate_limit import RateLimitMiddleware


class TestTokenMatching:
    def test_matching_bearer_token(self):
        assert token_matches("Bearer s3cret-token", "s3cret-token")

    def test_scheme_is_case_insensitive(self):
        assert token_matches("bearer s3cret-token", "s3cret-token")

    @pytest.mark.parametrize(
        "header",
        ["", "Bearer", "Bearer ", "Basic s3cret-token", "Bearer wrong", "s3cret-token"],
    )
    def test_rejected_headers(self, header):
        assert not token_matches(header, "s3cret-token")

    def test_unconfigured_token_rejects_everything(self):
        assert not token_matches("Bearer ", "")
        assert not token_matches("Bearer anything", "")

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/api/admin", True),
            ("/api/admin/faq", True),
            ("/api/administrator", False),
            ("/api/faq", False),
            ("/health", False),
        ],
    )
    def test_admin_path_detection(self, path, expected):
        assert is_admin_path(path) is expected


def _limited_app():
    async def ok(request):
        return PlainTextResponse("ok")

    app = Starlette(
        routes=[
            Route("/api/admin/faq", ok, methods=["GET", "POST"]),
            Route("/api/faq", ok, methods=["POST"]),
        ]
    )
    app.add_middleware(RateLimitMiddleware)
    return app


class TestAdminRateLimit:
    @pytest.mark.asyncio
    async def test_mutations_over_limit_get_429(self, monkeypatch):
        monkeypatch.setattr(settings, "admin_rate_limit_requests", 2)
        monkeypatch.setattr(settings, "admin_rate_limit_window", 60)

        transport = ASGITransport(app=_limited_app())
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            first = await client.post("/api/admin/faq")
            second = await client.post("/api/admin/faq")
            third = await client.post("/api/admin/faq")

        assert first.status_code == 200
        assert second.status_code == 200
        assert third.status_code == 429
        assert int(third.headers["Retry-After"]) >= 1
        assert third.json()["error"] == "rate_limit_exceeded"

    @pytest.mark.asyncio
    async def test_reads_and_public_routes_are_not_counted(self, monkeypatch):
        monkeypatch.setattr(settings, "admin_rate_limit_requests", 1)

        transport = ASGITransport(app=_limited_app())
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            reads = [await client.get("/api/admin/faq") for _ in range(3)]
            public = [await client.post("/api/faq") for _ in range(3)]
            write = await client.post("/api/admin/faq")

        assert all(r.status_code == 200 for r in reads + public)
        assert write.status_code == 200
