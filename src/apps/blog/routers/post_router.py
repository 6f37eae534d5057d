"""Post router."""

from typing import Optional

from fastapi import Depends, File, Form, UploadFile, status

from src.core import exceptions
from src.core.database import get_session
from src.core.bases.base_router import BaseRouter
from src.core.response.handlers import success_response
from src.core.security import get_current_user
from src.core.services.storage_service import get_thumbnail_storage
from src.apps.blog.services.post_service import PostService
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.schemas.post import PostRead
from src.apps.users.models.user import User
from src.apps.users.repositories.user_repository import UserRepository


def get_post_repository():
    """Get post repository instance."""
    return PostRepository(get_session) #type:ignore


def get_post_service():
    """Get post service instance."""
    repository = get_post_repository()
    return PostService(
        repository,
        user_repository=UserRepository(get_session), #type:ignore
        storage=get_thumbnail_storage(),
    )


class PostRouter(BaseRouter):
    """Post router class."""

    def __init__(self):
        super().__init__(
            service=get_post_service(),
            response_schema=PostRead,
            prefix="/posts",
            tags=["Posts"]
        )

    def _register_routes(self) -> None:
        super()._register_routes()
        self._register_filters()
        self._register_create()
        self._register_edit()
        self._register_delete()

    def _register_filters(self) -> None:
        async def list_by_category(category: str):
            try:
                result = await self.service.list_by_category(category)
                return self._respond(result)
            except exceptions.AppException as e:
                return self._handle_exception(e)

        async def list_by_creator(user_id: int):
            try:
                result = await self.service.list_by_creator(user_id)
                return self._respond(result)
            except exceptions.AppException as e:
                return self._handle_exception(e)

        self.add_custom_route(
            "/categories/{category}",
            "get",
            list_by_category,
            response_model=None,
            summary="List posts in a category",
        )
        self.add_custom_route(
            "/users/{user_id}",
            "get",
            list_by_creator,
            response_model=None,
            summary="List posts written by a user",
        )

    def _register_create(self) -> None:
        """Register POST / route (multipart)."""
        @self.router.post(
            "",
            response_model=None,
            status_code=status.HTTP_201_CREATED,
            summary="Create new post",
            responses={
                201: {"description": "Post created successfully"},
                401: {"description": "Missing or invalid token"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def create_post(
            title: Optional[str] = Form(None),
            category: Optional[str] = Form(None),
            description: Optional[str] = Form(None),
            thumbnail: Optional[UploadFile] = File(None),
            current_user: User = Depends(get_current_user),
        ):
            try:
                result = await self.service.create_post(
                    user=current_user,
                    title=title,
                    category=category,
                    description=description,
                    thumbnail=thumbnail,
                )
                return self._respond(result, status_code=status.HTTP_201_CREATED)
            except exceptions.AppException as e:
                return self._handle_exception(e)

    def _register_edit(self) -> None:
        """Register PATCH /{item_id} route (multipart, thumbnail optional)."""
        @self.router.patch(
            "/{item_id}",
            response_model=None,
            summary="Edit post",
            responses={
                200: {"description": "Post updated successfully"},
                400: {"description": "Post could not be updated"},
                403: {"description": "Caller is not the creator"},
                404: {"description": "Post not found"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def edit_post(
            item_id: int,
            title: Optional[str] = Form(None),
            category: Optional[str] = Form(None),
            description: Optional[str] = Form(None),
            thumbnail: Optional[UploadFile] = File(None),
            current_user: User = Depends(get_current_user),
        ):
            try:
                result = await self.service.edit_post(
                    post_id=item_id,
                    user=current_user,
                    title=title,
                    category=category,
                    description=description,
                    thumbnail=thumbnail,
                )
                return self._respond(result)
            except exceptions.AppException as e:
                return self._handle_exception(e)

    def _register_delete(self) -> None:
        """Register DELETE /{item_id} route."""
        @self.router.delete(
            "/{item_id}",
            response_model=None,
            summary="Delete post and its thumbnail",
            responses={
                200: {"description": "Post deleted successfully"},
                403: {"description": "Caller is not the creator"},
                404: {"description": "Post not found"},
                500: {"description": "Thumbnail could not be removed"}
            }
        )
        async def delete_post(
            item_id: int,
            current_user: User = Depends(get_current_user),
        ):
            try:
                result = await self.service.remove_post(item_id, current_user)
                return success_response(data=result["data"])
            except exceptions.AppException as e:
                return self._handle_exception(e)


# Router instance
router = PostRouter().get_router()
