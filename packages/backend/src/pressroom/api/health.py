"""Health check endpoint.

Reports server status plus database and Redis reachability. Redis is
optional, so only a database failure marks the service degraded.
"""

from fastapi import APIRouter
from sqlalchemy import text

from pressroom import __version__
from pressroom.cache import redis_available
from pressroom.db.engine import engine

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    checks["redis"] = "ok" if await redis_available() else "unavailable"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
