"""
Exceptions for Shelf Archive

Uniform error kinds surfaced to callers:
- Link normalization failures
- Missing archive records
- Corrupt persisted archives
- Remote service failures
"""

from typing import Optional


class ShelfArchiveException(Exception):
    """Base exception for Shelf Archive errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        detail: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for display or logging."""
        return {
            "error": self.message,
            "code": self.code,
            "detail": self.detail,
        }


class UnrecognizedLinkError(ShelfArchiveException):
    """A URL that does not resolve to a known catalog vendor."""

    MESSAGE = "The provided link does not map to a recognized volume."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            message=self.MESSAGE,
            code="UNRECOGNIZED_LINK",
            detail=detail,
        )


class NotFoundError(ShelfArchiveException):
    """Record not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            detail=f"No {resource} with identifier '{identifier}' exists",
        )


class ArchiveCorruptError(ShelfArchiveException):
    """Persisted archive blob could not be decoded."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            message="Stored archive is unreadable",
            code="ARCHIVE_CORRUPT",
            detail=detail,
        )


class ExternalServiceError(ShelfArchiveException):
    """External service failure."""

    def __init__(self, service: str, detail: Optional[str] = None):
        super().__init__(
            message=f"{service} service unavailable",
            code="EXTERNAL_SERVICE_ERROR",
            detail=detail,
        )
