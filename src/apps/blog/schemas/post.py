"""Post schemas."""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, field_validator

from src.core.config import settings


class PostCreate(BaseModel):
    """Fields stored when creating a post."""
    title: str
    category: str
    description: str
    thumbnail: str
    creator_id: int


class PostUpdate(BaseModel):
    """Fields changed when editing a post."""
    title: str
    category: str
    description: str
    thumbnail: Optional[str] = None


class PostRead(BaseModel):
    """Post as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    description: str
    thumbnail: str
    creator_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def attach_time_zone(cls, value: datetime) -> datetime:
        # SQLite drops the offset; stored values are wall-clock time in TIME_ZONE
        if value.tzinfo is None:
            return value.replace(tzinfo=ZoneInfo(settings.TIME_ZONE))
        return value
