from typing import Any, List, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from src.core import exceptions
from src.core.logger import get_logger
from src.core.response.schemas import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


def success_response(
    data: Any = None, status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    """Plain JSON body: the API returns resources without an envelope."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))


def error_response(
    error_code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[List[ErrorDetail]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        error_code=error_code,
        error_details=details or [],
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def exception_response(exc: exceptions.AppException) -> JSONResponse:
    """Render a typed application error as an error envelope."""
    return error_response(
        error_code=exc.error_code,
        message=str(exc.detail),
        status_code=exc.status_code,
        details=exc.error_details,
    )


async def app_exception_handler(request: Request, exc: exceptions.AppException):
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return exception_response(exc)


async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="Something went wrong.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
