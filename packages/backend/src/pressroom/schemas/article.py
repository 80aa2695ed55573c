"""Pydantic schemas for articles.

Create/update bodies only accept title and body; unknown keys are
dropped before they reach the service.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)

    model_config = {"extra": "ignore"}


class ArticleUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    body: Optional[str] = Field(None, min_length=1)

    model_config = {"extra": "ignore"}


class ArticleRead(BaseModel):
    id: int
    title: str
    body: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
