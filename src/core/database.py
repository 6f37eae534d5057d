from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import DateTime, Field, SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.core.config import settings

engine = create_async_engine(
    settings.ASYNC_DATABASE_URL,
    #  echo=True,
)


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, Any]:
    async with AsyncSession(engine) as session:
        yield session


async def init_db() -> None:
    """Create every registered table."""
    # Registers all app models on SQLModel.metadata
    import src.shared.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def check_connection() -> None:
    async with get_session() as session:
        await session.exec(text("SELECT 1"))  # type: ignore


class BaseModel(SQLModel):
    """Base model with common fields."""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=settings.get_now, sa_type=DateTime(timezone=True)
    )
    updated_at: datetime = Field(
        default_factory=settings.get_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": settings.get_now},
    )
