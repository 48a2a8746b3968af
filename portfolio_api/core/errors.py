"""
Error taxonomy and the exception handlers that turn it into API responses.

Every error body has the shape {"success": false, "message": ...}. Only the
client-safe ``message`` is ever rendered; underlying exception text is logged.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised at startup when the service cannot be configured."""


class ContactAPIError(Exception):
    """Base class for errors rendered as API responses."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error. Please try again later."

    def __init__(self, message=None, reason=None):
        self.message = message or self.default_message
        self.reason = reason or self.message
        super().__init__(self.message)


class ValidationError(ContactAPIError):
    """Bad or missing client input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class NotFoundError(ContactAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class DependencyError(ContactAPIError):
    """The document store or the mail relay failed."""


class InternalError(ContactAPIError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


async def contact_api_error_handler(request: Request, exc: ContactAPIError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path} failed: {exc.reason}")
    return error_response(exc.status_code, exc.message)


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"⚠️ Rejected malformed request to {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, ValidationError.default_message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ContactAPIError, contact_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
