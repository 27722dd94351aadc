#!/usr/bin/env python3
"""
Global exception handlers
Every API error goes out in the same envelope
"""

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback

from api.utils.api_response import APIResponse

logger = logging.getLogger(__name__)

# status code -> error code
ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
    503: "SERVICE_UNAVAILABLE"
}


def setup_exception_handlers(app: FastAPI):
    """Install the global exception handlers"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """HTTP exceptions (FastAPI's HTTPException included)"""
        logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail}")

        return APIResponse.error(
            ERROR_CODES.get(exc.status_code, "UNKNOWN_ERROR"),
            str(exc.detail),
            f"HTTP {exc.status_code}",
            status_code=exc.status_code
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies"""
        logger.warning(f"Validation Error on {request.url.path}: {exc.errors()}")

        return APIResponse.error(
            "VALIDATION_ERROR", "Invalid request payload", str(exc.errors()), status_code=422
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.error(f"Value Error: {exc}")

        return APIResponse.error("INVALID_VALUE", "Invalid data format", str(exc), status_code=400)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Anything left uncaught"""
        logger.error(f"Unhandled Exception: {type(exc).__name__}: {exc}")
        logger.error(f"Traceback: {traceback.format_exc()}")

        # no internals leak outside debug mode
        error_details = str(exc) if logger.isEnabledFor(logging.DEBUG) else "Internal server error"

        return APIResponse.error(
            "INTERNAL_ERROR", "Internal server error, please retry later", error_details, status_code=500
        )


def create_http_exception(status_code: int, message: str, details: str = ""):
    detail = message
    if details:
        detail = f"{message}: {details}"
    return HTTPException(status_code=status_code, detail=detail)


def bad_request(message: str, details: str = ""):
    """400 Bad Request"""
    return create_http_exception(400, message, details)
