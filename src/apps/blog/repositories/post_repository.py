"""Post repository."""

from typing import Any, List

from src.core.bases.base_repository import BaseRepository
from src.apps.blog.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Post repository class."""

    model = Post

    async def list_by_category(self, category: str) -> List[Post]:
        return await self.get_many(
            order_by=[Post.created_at.desc(), Post.id.desc()],  # type: ignore
            category=category,
        )

    async def list_by_creator(self, creator_id: Any) -> List[Post]:
        return await self.get_many(
            order_by=[Post.created_at.desc(), Post.id.desc()],  # type: ignore
            creator_id=creator_id,
        )

    async def referenced_thumbnails(self) -> set[str]:
        """Filenames currently referenced by any post."""
        posts = await self.get_many()
        return {post.thumbnail for post in posts}
