"""Post model."""

from enum import Enum
from typing import Optional

from sqlmodel import Field
from src.core.database import BaseModel


class PostCategory(str, Enum):
    AGRICULTURE = "Agriculture"
    BUSINESS = "Business"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    ART = "Art"
    INVESTMENT = "Investment"
    UNCATEGORIZED = "Uncategorized"
    WEATHER = "Weather"

    @classmethod
    def values(cls) -> list[str]:
        return [category.value for category in cls]


class Post(BaseModel, table=True):
    """Post model class."""

    __tablename__ = "blog_posts"  # type: ignore
    title: str = Field()
    category: str = Field(default=PostCategory.UNCATEGORIZED.value, index=True)
    description: str = Field()
    thumbnail: str = Field()
    creator_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
