"""API route aggregation.

All routers registered here get mounted in main.py under
settings.api_prefix. Auth is applied at the include_router level, so
every route in a protected router requires a valid bearer token.
"""

from fastapi import APIRouter, Depends

from pressroom.api.articles import router as articles_router
from pressroom.api.auth import router as auth_router
from pressroom.api.health import router as health_router
from pressroom.auth.dependencies import get_current_user
from pressroom.config import settings

_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix=settings.api_prefix)

# Open routes. /logout and /user declare get_current_user themselves.
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes
api_router.include_router(articles_router, tags=["articles"], dependencies=_auth)
