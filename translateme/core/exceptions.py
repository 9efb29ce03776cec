"""
Custom exceptions for the TranslateMe backend.

Every failure the translation and history flow can hit is one of these.
Clients and stores raise them; the orchestrating service catches them at its
boundary and turns them into a status signal instead of letting them escape.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Translation provider errors
    NETWORK_ERROR = "NETWORK_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    UNSUPPORTED_LANGUAGE = "UNSUPPORTED_LANGUAGE"

    # History store errors
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_PERMISSION_DENIED = "STORE_PERMISSION_DENIED"
    STORE_REJECTED = "STORE_REJECTED"
    STORE_PARTIAL_DELETE = "STORE_PARTIAL_DELETE"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class StoreErrorKind(str, Enum):
    """Why the document store refused an operation."""
    CONNECTIVITY = "connectivity"
    PERMISSION_DENIED = "permission_denied"
    REJECTED = "rejected"


class TranslateMeException(Exception):
    """Base exception for the TranslateMe backend."""

    retryable = True

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class NetworkError(TranslateMeException):
    """Raised when the translation endpoint cannot be reached."""

    def __init__(self, message: str = "Translation endpoint unreachable", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.NETWORK_ERROR,
            details=details,
            status_code=502
        )


class DecodeError(TranslateMeException):
    """Raised when a translation response is empty or has an unexpected shape."""

    def __init__(self, message: str = "Unexpected translation response", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.DECODE_ERROR,
            details=details,
            status_code=502
        )


class UnsupportedLanguageError(TranslateMeException):
    """Raised when requested language is not supported."""

    retryable = False

    def __init__(self, language: str, supported_languages: Optional[list] = None):
        details = {"requested_language": language}
        if supported_languages:
            details["supported_languages"] = supported_languages

        super().__init__(
            message=f"Language '{language}' is not supported",
            error_code=ErrorCode.UNSUPPORTED_LANGUAGE,
            details=details,
            status_code=400
        )


class StoreError(TranslateMeException):
    """Raised when the history store rejects or cannot complete an operation."""

    _codes = {
        StoreErrorKind.CONNECTIVITY: ErrorCode.STORE_UNAVAILABLE,
        StoreErrorKind.PERMISSION_DENIED: ErrorCode.STORE_PERMISSION_DENIED,
        StoreErrorKind.REJECTED: ErrorCode.STORE_REJECTED,
    }

    def __init__(
        self,
        operation: str,
        kind: StoreErrorKind = StoreErrorKind.REJECTED,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[ErrorCode] = None
    ):
        self.operation = operation
        self.kind = kind
        merged = {"operation": operation, "kind": kind.value}
        merged.update(details or {})
        super().__init__(
            message=message or f"History store {operation} failed ({kind.value})",
            error_code=error_code or self._codes[kind],
            details=merged,
            status_code=403 if kind == StoreErrorKind.PERMISSION_DENIED else 503
        )


class PartialDeleteError(StoreError):
    """
    Raised when a record-by-record clear could only delete part of the history.
    Records that were deleted stay deleted.
    """

    def __init__(self, deleted: int, failed: int, kind: StoreErrorKind = StoreErrorKind.REJECTED):
        self.deleted = deleted
        self.failed = failed
        super().__init__(
            operation="clear",
            kind=kind,
            message=f"Cleared {deleted} history records, {failed} could not be deleted",
            details={"deleted": deleted, "failed": failed},
            error_code=ErrorCode.STORE_PARTIAL_DELETE
        )
