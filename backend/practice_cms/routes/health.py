"""
Practice CMS Backend — Health Check Route
=========================================

What:  Liveness/readiness check for Docker and load balancers.
How:   Runs SELECT 1 on a pooled connection. The database is the only
       hard dependency: without it every page renders empty.

Status levels:
    healthy:   database reachable (HTTP 200)
    unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from practice_cms import __version__
from practice_cms.database import DATABASE_ERRORS, engine
from practice_cms.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"model": HealthResponse}},
)
async def health_check():
    db_status = "connected"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except DATABASE_ERRORS as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    payload = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if db_status != "connected":
        return JSONResponse(status_code=503, content=payload.model_dump())
    return payload
