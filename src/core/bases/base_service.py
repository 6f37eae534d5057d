from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from sqlmodel import SQLModel

from src.core import exceptions
from src.core.bases.base_repository import BaseRepository, RepositoryError
from src.core.logger import get_logger

T = TypeVar("T", bound=SQLModel)


class BaseService(Generic[T]):
    """Business layer on top of a repository.

    Every public method returns ``{"data": ..., "message": ...}`` and raises the
    typed exceptions from ``src.core.exceptions``; repository failures surface
    as ``ServiceException``.
    """

    default_order_by: Optional[Sequence[Any]] = None

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository
        self.model_name = repository.model.__name__
        self.logger = get_logger(self.__class__.__module__)

    def _service_error(self, error: RepositoryError, operation: str) -> exceptions.ServiceException:
        self.logger.error("%s %s failed: %s", self.model_name, operation, error)
        return exceptions.ServiceException(
            detail=f"Could not {operation} {self.model_name.lower()}"
        )

    # ----------------- READ ----------------- #
    async def get_by_id(self, item_id: Any) -> Dict[str, Any]:
        try:
            item = await self.repository.get(item_id)
        except RepositoryError as e:
            raise self._service_error(e, "get") from e

        if item is None:
            raise exceptions.NotFoundException(detail=f"{self.model_name} not found.")

        return {"data": item, "message": f"{self.model_name} retrieved successfully"}

    async def get_list(
        self, order_by: Optional[Sequence[Any]] = None, **filters
    ) -> Dict[str, Any]:
        try:
            items: List[T] = await self.repository.get_many(
                order_by=order_by or self.default_order_by, **filters
            )
        except RepositoryError as e:
            raise self._service_error(e, "list") from e

        return {"data": items, "message": f"{self.model_name} list retrieved successfully"}

    # ----------------- WRITE ----------------- #
    async def create(self, create_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            item = await self.repository.create(create_data)
        except RepositoryError as e:
            raise self._service_error(e, "create") from e

        return {"data": item, "message": f"{self.model_name} created successfully"}

    async def update(
        self, item_id: Any, update_data: Dict[str, Any], existing_item: Optional[T] = None
    ) -> Dict[str, Any]:
        if existing_item is None:
            await self.get_by_id(item_id)
        try:
            item = await self.repository.update(item_id, update_data)
        except RepositoryError as e:
            raise self._service_error(e, "update") from e

        if item is None:
            raise exceptions.BadRequestException(
                detail=f"Could not update {self.model_name.lower()}"
            )
        return {"data": item, "message": f"{self.model_name} updated successfully"}

    async def delete(self, item_id: Any) -> Dict[str, Any]:
        try:
            deleted = await self.repository.delete(item_id)
        except RepositoryError as e:
            raise self._service_error(e, "delete") from e

        if not deleted:
            raise exceptions.NotFoundException(detail=f"{self.model_name} not found.")
        return {"data": item_id, "message": f"{self.model_name} {item_id} deleted"}
