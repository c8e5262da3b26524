"""Error Hierarchy: typed, categorized exceptions for all ticketing failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are business outcomes; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TicketingError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Category/tag ids carried on the error so callers can report the offending value
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ticket_id: int | None = None
    respond_id: int | None = None
    user_id: int | None = None
    debug_info: dict[str, Any] | None = None


class TicketingError(Exception):
    """Base exception for all ticketing errors."""

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
                "context": {
                    "ticket_id": self.context.ticket_id,
                    "respond_id": self.context.respond_id,
                    "user_id": self.context.user_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class TicketNotFoundError(TicketingError):
    """Ticket with the requested id does not exist."""
    def __init__(self, ticket_id: int | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.ticket_id = ticket_id
        super().__init__(
            "ticket not found", "TICKET_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )


class TicketAlreadyExistsError(TicketingError):
    """User already owns a ticket with the same name, category and description."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "ticket already exists", "TICKET_ALREADY_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, context, 409,
        )


class RespondNotFoundError(TicketingError):
    """Respond with the requested id does not exist."""
    def __init__(self, respond_id: int | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.respond_id = respond_id
        super().__init__(
            "respond not found", "RESPOND_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )


class RespondAlreadyExistsError(TicketingError):
    """Master already responded to this ticket."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "respond already exists", "RESPOND_ALREADY_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, context, 409,
        )


class RespondToOwnTicketError(TicketingError):
    """Ticket owner attempted to respond to their own ticket."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "respond to own Ticket is not allowed", "RESPOND_TO_OWN_TICKET",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.ERROR, context, 400,
        )


class CategoryNotFoundError(TicketingError):
    """Category id is not reported by the taxonomy service."""
    def __init__(self, category_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"category with ID={category_id} not found", "CATEGORY_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, context, 404,
        )
        self.category_id = category_id


class TagNotFoundError(TicketingError):
    """Tag id is not reported by the taxonomy service."""
    def __init__(self, tag_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"tag with ID={tag_id} not found", "TAG_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, context, 404,
        )
        self.tag_id = tag_id


class MasterNotFoundError(TicketingError):
    """User has no master profile in the taxonomy service."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"master for user with ID={user_id} not found", "MASTER_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TicketingError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class TaxonomyServiceError(TicketingError):
    """Taxonomy service call failed."""
    def __init__(
        self, message: str, api_error_type: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Taxonomy service error ({api_error_type}): {message}",
            "TAXONOMY_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.api_error_type = api_error_type
