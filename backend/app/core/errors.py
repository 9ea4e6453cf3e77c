"""Error Hierarchy — typed, categorized exceptions for all Task Manager failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope; the top-level key is always "error"
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskManagerError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    provider: str | None = None


class TaskManagerError(Exception):
    """Base exception for all Task Manager errors."""

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
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestRejectedError(TaskManagerError):
    """Request is well-formed JSON but violates a business rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "REQUEST_REJECTED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class AuthenticationError(TaskManagerError):
    """Bearer token missing or rejected by the identity service."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(TaskManagerError):
    """Authenticated caller lacks the role required for the operation."""
    def __init__(self, message: str = "Unauthorized", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(TaskManagerError):
    """Requested resource does not exist (or is owned by someone else)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class InsufficientCreditsError(TaskManagerError):
    """Credit balance is lower than the amount requested."""
    def __init__(self, balance: int, required: int, context: ErrorContext | None = None):
        super().__init__(
            "Insufficient credits", "INSUFFICIENT_CREDITS",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context, 402,
        )
        self.balance = balance
        self.required = required

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["credits"] = self.balance
        response["error"]["required"] = self.required
        return response


class WebhookSignatureError(TaskManagerError):
    """Stripe-Signature header does not match the payload."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid signature", "INVALID_SIGNATURE", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TaskManagerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class IdentityServiceError(TaskManagerError):
    """Hosted identity service could not be reached."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Identity service error: {message}",
            "IDENTITY_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )


class PaymentProviderError(TaskManagerError):
    """Stripe API call failed."""
    def __init__(
        self, message: str, stripe_error_type: str, context: ErrorContext | None = None,
    ):
        # Stripe rejected the parameters: the caller can fix it
        is_client_error = stripe_error_type == "invalid_request"
        super().__init__(
            message, "PAYMENT_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR if is_client_error else ErrorSeverity.CRITICAL,
            context, 400 if is_client_error else 502,
        )
        self.stripe_error_type = stripe_error_type


class AIServiceUnavailableError(TaskManagerError):
    """No AI provider produced a completion."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "AI service unavailable. Please check API keys in admin settings.",
            "AI_SERVICE_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )


class AIProviderError(TaskManagerError):
    """A single required AI provider call failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "AI_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
        )


class WebhookProcessingError(TaskManagerError):
    """A verified webhook event could not be applied (Stripe will redeliver)."""
    def __init__(self, event_type: str, context: ErrorContext | None = None):
        super().__init__(
            "Webhook handler failed", "WEBHOOK_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.event_type = event_type
