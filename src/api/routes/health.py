"""Health check endpoints."""

import time
from datetime import datetime

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

logger = structlog.get_logger()

router = APIRouter(tags=["health"])


class DatabaseStatus(BaseModel):
    status: str
    latency_ms: float | None = None


class HealthResponse(BaseModel):
    """Liveness answer, with the database check on the detailed endpoint."""

    status: str
    version: str
    timestamp: datetime
    environment: str
    database: DatabaseStatus | None = None


def _health(status: str, database: DatabaseStatus | None = None) -> HealthResponse:
    return HealthResponse(
        status=status,
        version=settings.app_version,
        timestamp=datetime.utcnow(),
        environment=settings.app_env,
        database=database,
    )


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    """Answer without touching any dependency, for load balancers."""
    return _health("healthy")


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Readiness probe",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Ping the database. A failed ping reports ``degraded`` rather than erroring."""
    started = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("database_ping_failed", error_type=type(e).__name__)
        return _health("degraded", DatabaseStatus(status="unhealthy"))

    latency = round((time.perf_counter() - started) * 1000, 2)
    return _health("healthy", DatabaseStatus(status="healthy", latency_ms=latency))
