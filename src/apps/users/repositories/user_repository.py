"""User repository."""

from typing import Any

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from src.core.bases.base_repository import BaseRepository
from src.apps.users.models.user import User


class UserRepository(BaseRepository[User]):
    """User repository class."""

    model = User

    async def adjust_post_count(self, user_id: Any, delta: int) -> None:
        """Add ``delta`` to the user's post count in a single UPDATE."""
        async with self.get_session() as db:
            try:
                stmt = (
                    update(User)
                    .where(User.id == user_id)  # type: ignore
                    .values(posts=User.posts + delta)
                )
                await db.exec(stmt)  # type: ignore
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "adjust_post_count")
