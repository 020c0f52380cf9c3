"""
Custom exceptions for consistent error reporting.

Provides standardized error codes for storage failures and missing records.
"""

from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class StorageError(AppException):
    """
    Raised when the relational engine fails to run a command.

    The engine's own exception is kept on ``original`` and is also chained
    as ``__cause__`` by callers using ``raise ... from``.
    """

    def __init__(
        self,
        message: str,
        operation: str = None,
        original: Exception = None,
        error_code: str = "ERR_STORAGE_001",
        details: Dict[str, Any] = None
    ):
        details = dict(details or {})
        if operation:
            details.setdefault("operation", operation)
        super().__init__(message=message, error_code=error_code, details=details)
        self.operation = operation
        self.original = original

    @classmethod
    def from_exception(cls, operation: str, exc: Exception) -> "StorageError":
        """Wrap an engine exception raised while running ``operation``."""
        return cls(
            message=str(exc),
            operation=operation,
            original=exc,
            details={"engine_error": type(exc).__name__}
        )


class ResourceNotFoundError(StorageError):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            details={"resource": resource, "id": resource_id}
        )
        self.resource = resource
        self.resource_id = resource_id


class ParcelNotFoundError(ResourceNotFoundError):
    """Raised when no parcel matches the requested number."""

    def __init__(self, number: int):
        super().__init__(resource="Parcel", resource_id=number)
        self.number = number
