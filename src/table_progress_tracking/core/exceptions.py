"""Custom exception classes and error handling."""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> dict[str, Any]:
        """Convert to API error response format."""
        response: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ValidationError(AppException):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class AuthorizationError(AppException):
    """Authorization error."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(
            message=message,
            code="AUTHORIZATION_ERROR",
            status_code=status.HTTP_403_FORBIDDEN,
        )


class ConflictError(AppException):
    """Resource conflict error."""

    def __init__(self, message: str, code: str = "CONFLICT", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class DuplicateTableIdError(ConflictError):
    """A page defines more than one progress table with the same table-id."""

    def __init__(self, table_ids: list[str]):
        super().__init__(
            message=(
                "Each <table-progress-tracking> tag on a page must have a unique table-id. "
                f"Duplicated: {', '.join(table_ids)}"
            ),
            code="DUPLICATE_TABLE_ID",
            details={"table_ids": table_ids},
        )
        self.table_ids = table_ids


class ProgressStoreError(AppException):
    """The progress store could not complete a write."""

    def __init__(self, message: str, operation: str):
        super().__init__(
            message=message,
            code="PROGRESS_STORE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"operation": operation},
        )
        self.operation = operation


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException and return JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException and return consistent JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": "HTTP_ERROR",
            "message": exc.detail,
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed requests as 400 VALIDATION_ERROR."""
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Invalid request.",
            "details": {"errors": errors},
        },
    )
