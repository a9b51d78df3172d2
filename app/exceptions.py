# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Three kinds of failure reach the request boundary:
# - validation errors (client-caused, field-level detail, HTTP 400)
# - domain errors (raised on purpose, carry their own status code)
# - everything else (logged, collapsed to a generic HTTP 500)
#
# Framework HTTP errors (401 from auth, unknown routes) use the same
# {success: false, error, code} envelope.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class SongbookException(Exception):
    """
    Base exception for the Songbook API.

    All custom exceptions inherit from this class and render to a
    structured `{success: false, error, code, ...}` response.
    """

    def __init__(
        self,
        message: str,
        code: str = "SONGBOOK_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Song Exceptions
# =============================================================================

class SongValidationError(SongbookException):
    """Raised when a submitted song payload fails schema validation."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            message="Validation error",
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion="Fix the listed fields and resubmit",
            details=errors,
        )
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        """Names of every field that failed."""
        return [error["field"] for error in self.errors]


class SongNotFoundError(SongbookException):
    """Raised when no song matches the requested id or title."""

    def __init__(self, key: str, value: str):
        super().__init__(
            message=f"Song not found: {value}",
            code="SONG_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the song {key} is correct",
            details={key: value},
        )


class SongRepositoryError(SongbookException):
    """
    Raised when the datastore is unavailable or rejects a write.

    Distinct from a not-found lookup, which is a normal outcome.
    """

    def __init__(
        self,
        message: str,
        code: str = "REPOSITORY_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=500,
            suggestion=suggestion,
            details=details or {},
        )


class BulkImportNotImplementedError(SongbookException):
    """Raised for multipart (file import) submissions."""

    def __init__(self):
        super().__init__(
            message="Bulk song import is not implemented",
            code="BULK_IMPORT_NOT_IMPLEMENTED",
            status_code=501,
            suggestion="Submit songs one at a time as application/json",
        )


class UnsupportedMediaTypeError(SongbookException):
    """Raised when a write request carries an unexpected content type."""

    def __init__(self, content_type: str):
        super().__init__(
            message=f"Unsupported content type: {content_type or 'none'}",
            code="UNSUPPORTED_MEDIA_TYPE",
            status_code=415,
            suggestion="Send the song as application/json",
            details={"content_type": content_type},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def songbook_exception_handler(
    request: Request,
    exc: SongbookException
) -> JSONResponse:
    """
    Convert SongbookException to JSON response.

    Repository failures are logged with their detail, but the client
    only sees a generic message.
    """
    if isinstance(exc, SongRepositoryError):
        logger.error(f"Repository failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": "Internal server error",
                "code": exc.code,
            }
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


# Codes for framework HTTP errors; anything else becomes HTTP_<status>
HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors in the standard error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "code": HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}"),
        },
        headers=getattr(exc, "headers", None),
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Log anything unhandled and hide its detail from the client."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
    )
