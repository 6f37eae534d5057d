"""Post service."""

from typing import Any, Dict, Optional

from fastapi import UploadFile

from src.core import exceptions
from src.core.bases.base_repository import RepositoryError
from src.core.bases.base_service import BaseService
from src.core.services.storage_service import (
    StorageError,
    ThumbnailStorage,
    ThumbnailValidationError,
)
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.models.post import Post, PostCategory
from src.apps.blog.schemas.post import PostCreate, PostUpdate
from src.apps.users.models.user import User
from src.apps.users.repositories.user_repository import UserRepository

MIN_DESCRIPTION_LENGTH = 12


class PostService(BaseService[Post]):
    """Post service class."""

    default_order_by = [Post.updated_at.desc(), Post.id.desc()]  # type: ignore

    def __init__(
        self,
        repository: PostRepository,
        user_repository: UserRepository,
        storage: ThumbnailStorage,
    ):
        super().__init__(repository)
        self.repository: PostRepository = repository
        self.user_repository = user_repository
        self.storage = storage

    # ----------------- READ ----------------- #
    async def list_by_category(self, category: str) -> Dict[str, Any]:
        if category not in PostCategory.values():
            return {"data": [], "message": f"No posts in {category}"}
        try:
            posts = await self.repository.list_by_category(category)
        except RepositoryError as e:
            raise self._service_error(e, "list") from e
        return {"data": posts, "message": f"Posts in {category} retrieved successfully"}

    async def list_by_creator(self, creator_id: int) -> Dict[str, Any]:
        try:
            posts = await self.repository.list_by_creator(creator_id)
        except RepositoryError as e:
            raise self._service_error(e, "list") from e
        return {"data": posts, "message": f"Posts by user {creator_id} retrieved successfully"}

    # ----------------- WRITE ----------------- #
    async def create_post(
        self,
        user: User,
        title: Optional[str],
        category: Optional[str],
        description: Optional[str],
        thumbnail: Optional[UploadFile],
    ) -> Dict[str, Any]:
        if not title or not category or not description or not self.storage.is_present(thumbnail):
            raise exceptions.ValidationException(
                detail="Fill in all fields and choose thumbnail."
            )
        self._validate_category(category)

        filename = await self._store_thumbnail(thumbnail)  # type: ignore
        post_in = PostCreate(
            title=title,
            category=category,
            description=description,
            thumbnail=filename,
            creator_id=user.id,  # type: ignore
        )
        try:
            result = await self.create(post_in.model_dump())
        except exceptions.ServiceException:
            await self._discard_thumbnail(filename)
            raise

        await self._adjust_post_count(user.id, 1)
        self.logger.info("User %s created post %s", user.id, result["data"].id)
        return result

    async def edit_post(
        self,
        post_id: int,
        user: User,
        title: Optional[str],
        category: Optional[str],
        description: Optional[str],
        thumbnail: Optional[UploadFile] = None,
    ) -> Dict[str, Any]:
        if not title or not title.strip():
            raise exceptions.ValidationException.for_field("title", "Title is required")
        if not category or not category.strip():
            raise exceptions.ValidationException.for_field("category", "Category is required")
        if not description or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
            raise exceptions.ValidationException.for_field(
                "description",
                f"Description must be {MIN_DESCRIPTION_LENGTH} characters long",
            )
        self._validate_category(category)

        old_post = await self._get_post(post_id)
        if old_post.creator_id != user.id:
            raise exceptions.ForbiddenException(detail="Unauthorized for this post.")

        if not self.storage.is_present(thumbnail):
            update_in = PostUpdate(title=title, category=category, description=description)
            return await self.update(post_id, update_in.model_dump(exclude_unset=True), old_post)

        new_filename = await self._store_thumbnail(thumbnail)  # type: ignore
        update_in = PostUpdate(
            title=title, category=category, description=description, thumbnail=new_filename
        )
        try:
            result = await self.update(post_id, update_in.model_dump(exclude_unset=True), old_post)
        except exceptions.AppException:
            await self._discard_thumbnail(new_filename)
            raise

        if old_post.thumbnail:
            try:
                await self.storage.delete(old_post.thumbnail)
            except StorageError as e:
                self.logger.warning("Failed to delete thumbnail: %s", e)

        self.logger.info("User %s replaced thumbnail of post %s", user.id, post_id)
        return result

    async def remove_post(self, post_id: int, user: User) -> Dict[str, Any]:
        post = await self._get_post(post_id)
        if post.creator_id != user.id:
            raise exceptions.ForbiddenException(detail="Couldn't delete post.")

        try:
            await self.storage.delete(post.thumbnail)
        except StorageError as e:
            self.logger.error("Post %s not deleted: %s", post_id, e)
            raise exceptions.ServiceException(detail=str(e)) from e

        result = await self.delete(post_id)
        await self._adjust_post_count(user.id, -1)
        self.logger.info("User %s deleted post %s", user.id, post_id)
        return {"data": f"Post {post_id} deleted", "message": result["message"]}

    # ----------------- HELPERS ----------------- #
    async def _get_post(self, post_id: int) -> Post:
        try:
            return (await self.get_by_id(post_id))["data"]
        except exceptions.NotFoundException:
            raise exceptions.NotFoundException(detail="Post not found")

    def _validate_category(self, category: str) -> None:
        if category not in PostCategory.values():
            raise exceptions.ValidationException.for_field(
                "category", f"{category} is not supported."
            )

    async def _store_thumbnail(self, thumbnail: UploadFile) -> str:
        try:
            return await self.storage.save(thumbnail)
        except ThumbnailValidationError as e:
            raise exceptions.ValidationException.for_field("thumbnail", str(e)) from e
        except StorageError as e:
            raise exceptions.ServiceException(detail="Failed to upload thumbnail") from e

    async def _discard_thumbnail(self, filename: str) -> None:
        try:
            await self.storage.delete(filename)
        except StorageError as e:
            self.logger.warning("Could not remove unused thumbnail %s: %s", filename, e)

    async def _adjust_post_count(self, user_id: Any, delta: int) -> None:
        try:
            await self.user_repository.adjust_post_count(user_id, delta)
        except RepositoryError as e:
            self.logger.error("Post count of user %s not updated: %s", user_id, e)
            raise exceptions.ServiceException(detail="Could not update post count") from e
