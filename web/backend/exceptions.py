#!/usr/bin/env python3
"""
Error handlers for the web application.

Every error body has the same shape: {success: false, error, type}.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from servicematch.exceptions import InvalidCoordinate, MatchingError, ProviderNotFound

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "type": error_type
        }
    )


async def matching_exception_handler(
    request: Request,
    exc: MatchingError
) -> JSONResponse:
    """
    Handle matching engine exceptions.

    Args:
        request: The FastAPI request.
        exc: The matching exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, ProviderNotFound):
        status_code = 404
    elif isinstance(exc, InvalidCoordinate):
        status_code = 400

    if status_code == 500:
        logger.error(f"Matching error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return _error_response(status_code, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
