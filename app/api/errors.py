"""Mapping of domain errors to HTTP responses"""
import logging

from fastapi import HTTPException

from app.services.errors import (
    ThoughtNotFoundError,
    ThoughtOperationInProgressError,
    ThoughtServiceError,
    ThoughtValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(error: Exception) -> HTTPException:
    """
    Translate a domain error into an HTTPException.

    ThoughtServiceError messages are fixed and safe to show; anything else
    unexpected becomes a generic 500.
    """
    if isinstance(error, HTTPException):
        return error
    if isinstance(error, ThoughtValidationError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, ThoughtNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ThoughtOperationInProgressError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, ThoughtServiceError):
        return HTTPException(status_code=502, detail=error.message)

    logger.error(f"Unexpected error: {error}", exc_info=error)
    return HTTPException(status_code=500, detail="Internal server error")
