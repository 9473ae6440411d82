"""
Custom exceptions for the parcel tracker.

Every error carries a stable error code so callers branch on the kind,
never on message text.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ParcelNotFoundError(AppException):
    """Raised when no parcel row has the requested number."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(
            message=f"Parcel with number {number} not found",
            error_code="ERR_NOT_FOUND_001",
            details={"resource": "parcel", "number": number}
        )


class StorageError(AppException):
    """Raised when the underlying database rejects or fails an operation."""

    def __init__(self, operation: str, original: Optional[Exception] = None):
        self.operation = operation
        self.original = original
        message = f"Storage failure during {operation}"
        if original is not None:
            message = f"{message}: {type(original).__name__}: {original}"
        super().__init__(
            message=message,
            error_code="ERR_STORAGE_001",
            details={"operation": operation}
        )


class InvalidTransitionError(AppException):
    """Raised when a parcel's current status forbids the requested change."""

    def __init__(self, number: int, status: str, action: str):
        self.number = number
        self.status = status
        self.action = action
        super().__init__(
            message=f"Cannot {action} parcel {number} with status '{status}'",
            error_code="ERR_TRANSITION_001",
            details={"number": number, "status": status, "action": action}
        )
