"""Custom exceptions for the application."""

from typing import Any, Dict, Optional

from ..types import ErrorCode, ErrorSeverity


class TagAdminError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize exception.

        Args:
            message: Error message
            code: Error code
            severity: Error severity level
            details: Optional error details
        """
        super().__init__(message)
        self.code = code
        self.severity = severity
        self.details = details or {}


class ValidationError(TagAdminError):
    """Validation error."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR
    ):
        super().__init__(
            message,
            code=code,
            severity=ErrorSeverity.WARNING,
            details=details
        )


class AuthenticationError(TagAdminError):
    """Authentication error."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.AUTHENTICATION_ERROR
    ):
        super().__init__(
            message,
            code=code,
            severity=ErrorSeverity.ERROR,
            details=details
        )


class DigestMismatchError(AuthenticationError):
    """Submitted request digest does not match the expected digest."""

    def __init__(
        self,
        message: str = "Request digest mismatch",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details=details, code=ErrorCode.DIGEST_MISMATCH)


class MissingCanonicalNameError(ValidationError):
    """Rename/merge attempted without a target name."""

    def __init__(
        self,
        message: str = "Canonical name not specified",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details=details, code=ErrorCode.MISSING_CANONICAL_NAME)


class UnknownTermIdError(TagAdminError):
    """Referenced term id does not exist in the store."""

    def __init__(self, term_id: Any, details: Optional[Dict[str, Any]] = None):
        """Initialize unknown term error.

        Args:
            term_id: The id that could not be resolved
            details: Optional lookup details
        """
        super().__init__(
            f"Term {term_id} not found",
            code=ErrorCode.UNKNOWN_TERM_ID,
            severity=ErrorSeverity.WARNING,
            details=details or {"term_id": term_id}
        )
        self.term_id = term_id


class StoreError(TagAdminError):
    """Vocabulary store failure."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize store error.

        Args:
            message: Error message
            details: Optional store details
        """
        super().__init__(
            message,
            code=ErrorCode.STORE_ERROR,
            severity=ErrorSeverity.ERROR,
            details=details
        )
