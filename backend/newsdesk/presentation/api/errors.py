"""Translate domain exceptions into HTTP errors."""

from fastapi import HTTPException, status

from newsdesk.domain.exceptions import (
    BackendUnavailableError,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)

DOMAIN_ERRORS = (
    EntityNotFoundError,
    DuplicateEntityError,
    ValidationError,
    BackendUnavailableError,
)


def to_http_exception(exc: Exception) -> HTTPException:
    """Map a domain exception to the matching HTTP status."""
    if isinstance(exc, EntityNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, DuplicateEntityError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, ValidationError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, BackendUnavailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(exc))
