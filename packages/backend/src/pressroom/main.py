"""FastAPI application factory.

create_app() returns a configured FastAPI instance. Lifespan manages
startup/shutdown (logging, Redis, database engine). Middleware, the
failure → JSON handlers, and routers are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pressroom import __version__
from pressroom.api import api_router
from pressroom.cache import close_redis, init_redis
from pressroom.config import settings
from pressroom.errors import register_exception_handlers
from pressroom.log import configure_logging
from pressroom.middleware.rate_limit import RateLimitMiddleware
from pressroom.middleware.request_id import RequestIdMiddleware
from pressroom.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "pressroom.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    try:
        await init_redis()
        logger.info("pressroom.redis_connected", url=settings.redis_url)
    except Exception as e:
        # Redis is optional; rate limiting is skipped without it
        logger.warning("pressroom.redis_unavailable", error=str(e))

    yield

    logger.info("pressroom.shutdown")
    await close_redis()

    from pressroom.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="Pressroom",
        description="Articles API with bearer-token authentication",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: RequestId → Security → RateLimit → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
        auth_paths=(
            f"{settings.api_prefix}/login",
            f"{settings.api_prefix}/register",
        ),
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: pressroom.main:app)
app = create_app()
