"""
Error taxonomy and exception handlers.

Services raise subclasses of ``ApiError``; the handlers registered by
``register_exception_handlers`` turn them into the JSON envelope
``{"success": false, "message": ..., "error"?: ...}``.  The raw
``error`` text is only echoed when the application runs in the
development environment.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(ApiError):
    """A required field is missing or a value is out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class DuplicateError(ApiError):
    """Unique constraint violated in the store."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already exists"


class MissingReferenceError(ApiError):
    """A referenced document does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Author not found"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InvalidIdError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid id"


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Translate driver failures raised inside the block into ``InternalError``."""
    try:
        yield
    except ApiError:
        raise
    except PyMongoError as exc:
        logger.error("%s: %s", message, exc)
        raise InternalError(message, detail=str(exc)) from exc


def error_body(message: str, error: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return body


def _debug(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings is not None and settings.debug)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-producing handlers to ``app``."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        error = exc.detail if exc.detail and _debug(request) else None
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, error))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths are both
        # reported as an unmatched route.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=error_body("Route not found"),
            )
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Invalid request body"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = str(exc) if _debug(request) else "Something went wrong"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", error),
        )
