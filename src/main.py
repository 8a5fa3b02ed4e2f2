"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from api.v1.dependencies import get_post_service
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

setup_logging()

DESCRIPTION = """\
## Developer Network API

Developers publish a profile, share posts and react to each other's posts.

### Features
- **Profiles**: status, skills, social links, work history and education
- **Posts**: publish, like and comment
- **GitHub**: list a developer's public repositories

### Authentication
Endpoints acting on the caller's own data require a bearer token:
```
Authorization: Bearer <your_token>
```
Profile listing, profile lookup and the GitHub lookup are public.

### Rate Limits
- GET endpoints: 30 requests/minute
- POST/PUT/DELETE: 10 requests/minute
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Health check endpoints"},
    {"name": "profile", "description": "Developer profiles, experience and education"},
    {"name": "posts", "description": "Posts, likes and comments"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    logger.info("app_started", environment=settings.app_env, version=settings.app_version)
    yield
    # Background comment writes must land before the pool closes
    await get_post_service().wait_for_background_writes()
    await engine.dispose()
    logger.info("app_stopped")


def _add_middleware(app: FastAPI) -> None:
    """Install middleware. Starlette runs the last one added outermost."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Logging sits inside RequestID so the id is bound before the first log line
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=DESCRIPTION,
        version=settings.app_version,
        debug=settings.debug,
        license_info={"name": "MIT"},
        openapi_tags=OPENAPI_TAGS,
    )

    _add_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
        log_config=None,
    )
