"""
Exception mapping and global exception handlers
"""
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from slowapi.errors import RateLimitExceeded
from starlette import status as http_status
from starlette.exceptions import HTTPException as StarletteHTTPException

from .response import error_response
from shared.codes import BusinessCode
from core.config import settings
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException

_STATUS_BY_CODE = {
    BusinessCode.PARAM_MISSING: http_status.HTTP_400_BAD_REQUEST,
    BusinessCode.PARAM_VALIDATION_ERROR: http_status.HTTP_400_BAD_REQUEST,
    BusinessCode.FILE_TOO_LARGE: http_status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    BusinessCode.UNSUPPORTED_MEDIA_TYPE: http_status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    BusinessCode.DOCUMENT_NOT_FOUND: http_status.HTTP_404_NOT_FOUND,
    BusinessCode.STORAGE_WRITE_FAILED: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
    BusinessCode.STORAGE_READ_FAILED: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def business_code_to_http_status(code: int) -> int:
    """Map a business code to an HTTP status (400 by default)."""
    try:
        return _STATUS_BY_CODE.get(BusinessCode(code), http_status.HTTP_400_BAD_REQUEST)
    except ValueError:
        return http_status.HTTP_400_BAD_REQUEST


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", object()), "request_id", None) or str(uuid.uuid4())


def register_exception_handlers(app: FastAPI):
    """
    Register global exception handlers

    Args:
        app: FastAPI application
    """

    logger = get_logger(__name__)

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """Business exceptions: message is safe to show, details only for 4xx."""
        status_code = business_code_to_http_status(exc.code)
        logger.info(
            "business_exception",
            request_id=_request_id(request),
            code=int(exc.code),
            error_type=exc.error_type,
            status_code=status_code,
        )
        details = exc.details if status_code < 500 else None
        return error_response(status_code, exc.message, details=details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Request parameter validation errors."""
        return error_response(
            http_status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            details=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
        """Requests over a slowapi limit."""
        limit = getattr(exc, "limit", None)
        message = getattr(limit, "error_message", None) or settings.rate_limit.api_limit_message
        logger.warning(
            "rate_limit_exceeded",
            request_id=_request_id(request),
            limit=str(exc.detail),
        )
        return error_response(http_status.HTTP_429_TOO_MANY_REQUESTS, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """HTTP errors, including unknown routes."""
        if exc.status_code == http_status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = f"Not Found: {request.method} {request.url.path}"
        else:
            message = str(exc.detail)
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Anything not handled above."""
        request_id = _request_id(request)
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            error=str(exc),
            exc_info=True,
        )
        # Detail only in development
        details = str(exc) if app.debug else None
        return error_response(
            http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            details=details,
        )
