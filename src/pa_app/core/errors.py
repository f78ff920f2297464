from __future__ import annotations

from fastapi import HTTPException, status


class PaAppError(Exception):
    """Base application exception."""

    pass


class BadRequest(PaAppError):
    pass


class NotFound(PaAppError):
    pass


class InvalidConfiguration(BadRequest):
    """Raised when an engine is built with settings that cannot work together."""


class MetadataError(PaAppError):
    """Embedded metadata could not be read from a file."""


class NotAnImage(MetadataError):
    pass


class MetadataReadFailed(MetadataError):
    pass


def to_http(exc: Exception) -> HTTPException:
    """
    Convert our exceptions to HTTPException with sensible defaults.
    """
    if isinstance(exc, BadRequest):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PaAppError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        )
    # Fallback
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
    )
