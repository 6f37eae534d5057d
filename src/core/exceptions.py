from typing import List, Optional

from fastapi import HTTPException, status

from src.core.response.schemas import ErrorDetail


class AppException(HTTPException):
    """Base HTTP error carrying a machine readable code and field details."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "ERROR"

    def __init__(
        self,
        detail: str,
        error_details: Optional[List[ErrorDetail]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(status_code=status_code or self.status_code, detail=detail)
        self.error_details = error_details or []


class BadRequestException(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "BAD_REQUEST"


class UnauthorizedException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"


class ForbiddenException(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"


class NotFoundException(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ValidationException(AppException):
    status_code = 422
    error_code = "VALIDATION_ERROR"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationException":
        return cls(
            detail=message,
            error_details=[ErrorDetail(field=field, code="INVALID", message=message)],
        )


class ServiceException(AppException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "SERVICE_ERROR"
