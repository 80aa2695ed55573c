"""Pydantic schemas for registration, login, and user output.

Input models list exactly the fields a caller may send; anything else in
the body is ignored. password_hash has no schema at all, so it cannot
leak into a response.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from pressroom.auth.password import MAX_PASSWORD_BYTES
from pressroom.config import settings


class RegisterRequest(BaseModel):
    name: str = Field(..., max_length=255)
    email: EmailStr
    password: str
    password_confirmation: str

    model_config = {"extra": "ignore"}

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise PydanticCustomError("blank", "The name field is required.")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < settings.password_min_length:
            raise PydanticCustomError(
                "password_too_short",
                "The password must be at least {min_length} characters.",
                {"min_length": settings.password_min_length},
            )
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                "The password may not be greater than {max_bytes} bytes.",
                {"max_bytes": MAX_PASSWORD_BYTES},
            )
        return v

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and v != password:
            raise PydanticCustomError(
                "password_mismatch",
                "The password confirmation does not match.",
            )
        return v


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str

    model_config = {"extra": "ignore"}

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserWithToken(UserRead):
    """Returned by register/login, the only place a token is echoed."""
    api_token: str


class UserEnvelope(BaseModel):
    data: UserRead


class UserWithTokenEnvelope(BaseModel):
    data: UserWithToken


class MessageEnvelope(BaseModel):
    data: str
