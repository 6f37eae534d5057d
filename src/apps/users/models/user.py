"""User model."""

from sqlmodel import Field
from src.core.database import BaseModel


class User(BaseModel, table=True):
    """Post author; ``posts`` is a denormalized count of their posts."""

    __tablename__ = "users"  # type: ignore
    name: str = Field()
    email: str = Field(unique=True, index=True)
    posts: int = Field(default=0)
