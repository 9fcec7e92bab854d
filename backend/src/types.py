"""Type definitions for the backend."""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCode(str, Enum):
    """Error codes for the application."""
    INTERNAL_ERROR = "internal_error"
    VALIDATION_ERROR = "validation_error"
    AUTHENTICATION_ERROR = "authentication_error"
    DIGEST_MISMATCH = "digest_mismatch"
    MISSING_CANONICAL_NAME = "missing_canonical_name"
    UNKNOWN_TERM_ID = "unknown_term_id"
    STORE_ERROR = "store_error"


class TagAction(str, Enum):
    """Bulk actions an administrator can apply to selected terms."""
    DELETE = "delete"
    RENAME = "rename"


class RequestState(str, Enum):
    """States a mutation request passes through.

    RECEIVED -> AUTH_CHECKED -> MUTATED -> REQUERIED -> RENDERED, or
    RECEIVED/AUTH_CHECKED -> REJECTED.
    """
    RECEIVED = "received"
    AUTH_CHECKED = "auth_checked"
    MUTATED = "mutated"
    REQUERIED = "requeried"
    RENDERED = "rendered"
    REJECTED = "rejected"
