from typing import Any, Callable, List, Optional, Type
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.core.bases.base_service import BaseService
from src.core.response.handlers import exception_response, success_response
from src.core import exceptions


class BaseRouter:
    """Base router class with the read endpoints every resource exposes."""

    def __init__(
        self,
        service: BaseService,
        tags: Optional[List[str]] = None,
        prefix: str = "",
        response_schema: Optional[Type[BaseModel]] = None,
        dependencies: Optional[List[Callable]] = None
    ):
        self.service = service
        self.tags = tags or [self.__class__.__name__.replace("Router", "")]
        self.prefix = prefix
        self.response_schema = response_schema

        # Create router
        self.router = APIRouter(
            prefix=self.prefix,
            tags=self.tags, #type:ignore
            dependencies=dependencies or [] #type:ignore
        )

        # Register routes
        self._register_routes()

    def _register_routes(self) -> None:
        """Register shared read routes."""
        self._register_list()
        self._register_get_by_id()

    def _serialize(self, data: Any) -> Any:
        """Run data through the response schema, if one is configured."""
        if self.response_schema is None:
            return data
        if isinstance(data, list):
            return [self.response_schema.model_validate(item) for item in data]
        return self.response_schema.model_validate(data)

    def _respond(self, result: dict, status_code: int = status.HTTP_200_OK) -> JSONResponse:
        return success_response(data=self._serialize(result["data"]), status_code=status_code)

    def _handle_exception(self, e: exceptions.AppException) -> JSONResponse:
        """Turn a typed service error into the error envelope."""
        return exception_response(e)

    def _register_get_by_id(self) -> None:
        """Register GET /{item_id} route."""
        @self.router.get(
            "/{item_id}",
            response_model=None,  # We'll use response handlers instead
            summary="Get item by ID",
            responses={
                200: {"description": "Item retrieved successfully"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"}
            }
        )
        async def get_by_id(item_id: int):
            try:
                result = await self.service.get_by_id(item_id=item_id)
                return self._respond(result)
            except exceptions.AppException as e:
                return self._handle_exception(e)

    def _register_list(self) -> None:
        """Register GET / route."""
        @self.router.get(
            "",
            response_model=None,
            summary="List items",
            responses={
                200: {"description": "Items retrieved successfully"},
                500: {"description": "Internal server error"}
            }
        )
        async def list_items():
            try:
                result = await self.service.get_list()
                return self._respond(result)
            except exceptions.AppException as e:
                return self._handle_exception(e)

    # Additional utility methods for custom routes
    def add_custom_route(
        self,
        path: str,
        method: str,
        endpoint: Callable,
        **kwargs
    ) -> None:
        """Add a custom route to the router."""
        method = method.lower()
        router_method = getattr(self.router, method, None)

        if router_method:
            router_method(path, **kwargs)(endpoint)
        else:
            raise ValueError(f"Unsupported HTTP method: {method}")

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router
