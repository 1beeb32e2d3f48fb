"""
API Exceptions
Error taxonomy and the handlers that turn it into JSON responses.
"""

import logging
from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GadgetAPIError(Exception):
    """Base exception for errors surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConflictError(GadgetAPIError):
    """A unique key (e.g. email) is already taken."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(GadgetAPIError):
    """Missing, invalid or expired token, or failed credential check."""
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(GadgetAPIError):
    """The targeted record does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailure(GadgetAPIError):
    """Malformed request body."""
    status_code = status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def gadget_api_error_handler(request: Request, exc: GadgetAPIError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.status_code, exc.message, headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Field-level details are not exposed; inputs may contain passwords so only locations are logged
    locations = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    logger.info("%s %s -> invalid request: %s", request.method, request.url.path, locations)
    return await gadget_api_error_handler(request, ValidationFailure("Invalid request body."))


def internal_error_response() -> JSONResponse:
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


async def error_boundary_middleware(request: Request, call_next: Callable) -> Response:
    """
    Turn unexpected exceptions into a generic 500 inside the middleware stack,
    so security headers and request logging still apply to the response.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return internal_error_response()


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Last resort for failures in the outer middlewares themselves
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GadgetAPIError, gadget_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
