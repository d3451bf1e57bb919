"""Error Hierarchy - typed, categorized exceptions for all whereismyfox failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ForbiddenError is indistinguishable from ResourceNotFoundError on the wire
      (same code, message, http_status): other users' devices never leak existence
    - Store errors (ResourceNotFoundError, DatabaseError) propagate verbatim to the API
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with WhereIsMyFoxError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ForbiddenError subclasses ResourceNotFoundError: every handler written for
      not-found automatically covers forbidden
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    device_id: int | None = None
    user: str | None = None


class WhereIsMyFoxError(Exception):
    """Base exception for all whereismyfox errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
            }
        }


# ─── Access Errors (400-level) ──────────────────────────────────

class UnauthorizedError(WhereIsMyFoxError):
    """No verified caller identity."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(WhereIsMyFoxError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ForbiddenError(ResourceNotFoundError):
    """Resource exists but belongs to another user. Surfaced exactly like not-found."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(resource_type, resource_id, context)


class IdentityVerificationError(WhereIsMyFoxError):
    """Identity assertion was rejected by the verifier."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Identity assertion not verified: {reason}",
            "IDENTITY_NOT_VERIFIED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(WhereIsMyFoxError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class VerifierUnavailableError(WhereIsMyFoxError):
    """Identity verifier could not be reached or answered garbage."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Identity verifier unavailable: {message}",
            "VERIFIER_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
