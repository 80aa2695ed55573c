"""Auth API — registration, login, logout, current user.

- POST /register → create an account, returns the user with a token
- POST /login → email/password → user with a fresh token
- POST /logout → revoke the caller's token
- GET /user → the authenticated caller
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.auth.dependencies import CurrentUser, get_current_user
from pressroom.db.engine import get_db
from pressroom.errors import render_failure
from pressroom.outcome import Failure
from pressroom.schemas.auth import (
    LoginRequest,
    MessageEnvelope,
    RegisterRequest,
    UserEnvelope,
    UserRead,
    UserWithToken,
    UserWithTokenEnvelope,
)
from pressroom.services.auth_service import AuthService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", response_model=UserWithTokenEnvelope, status_code=201)
async def register(body: RegisterRequest, svc: AuthService = Depends(_svc)):
    outcome = await svc.register(body)
    if isinstance(outcome, Failure):
        return render_failure(outcome)
    return {"data": UserWithToken.model_validate(outcome.value)}


@router.post("/login", response_model=UserWithTokenEnvelope)
async def login(body: LoginRequest, svc: AuthService = Depends(_svc)):
    outcome = await svc.login(body)
    if isinstance(outcome, Failure):
        return render_failure(outcome)
    return {"data": UserWithToken.model_validate(outcome.value)}


@router.post("/logout", response_model=MessageEnvelope)
async def logout(
    user: CurrentUser = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    outcome = await svc.logout(user.id)
    if isinstance(outcome, Failure):
        return render_failure(outcome)
    return {"data": "User logged out."}


@router.get("/user", response_model=UserEnvelope)
async def current_user(
    user: CurrentUser = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    outcome = await svc.get_user(user.id)
    if isinstance(outcome, Failure):
        return render_failure(outcome)
    return {"data": UserRead.model_validate(outcome.value)}
