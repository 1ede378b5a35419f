"""Error Hierarchy — typed, categorized exceptions for all Argument Forge failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Graph structure errors are 400-level; missing request targets are 404;
      oracle failures are 503
    - to_response() produces the REST envelope
    - debug_info names the argument / edge / oracle task involved

Design Decisions:
    - Single hierarchy with ForgeError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Unrecognized tagged-union variants share UnrecognizedVariantError so call sites
      can treat every exhaustive-match miss the same way
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    GRAPH_STRUCTURE = "graph_structure"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task: str | None = None
    argument: str | None = None
    edge: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class ForgeError(Exception):
    """Base exception for all Argument Forge errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "task": self.context.task,
                    "argument": self.context.argument,
                    "edge": self.context.edge,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


def edge_label(cause: str, effect: str) -> str:
    """Human-readable edge identity used in messages and logs."""
    return f"{cause}->{effect}"


# ─── Graph Structure Errors (400-level) ─────────────────────────

class DuplicateNodeError(ForgeError):
    """A node with the same argument text already exists."""
    def __init__(self, argument: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.argument = argument
        super().__init__(
            f"Node already exists: {argument!r}",
            "DUPLICATE_NODE", ErrorCategory.GRAPH_STRUCTURE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.argument = argument


class DanglingEndpointError(ForgeError):
    """An edge endpoint is not present in the graph."""
    def __init__(
        self, cause: str, effect: str, missing: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.edge = edge_label(cause, effect)
        ctx.argument = missing
        super().__init__(
            f"Edge {edge_label(cause, effect)!r} references missing node {missing!r}",
            "DANGLING_ENDPOINT", ErrorCategory.GRAPH_STRUCTURE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.cause = cause
        self.effect = effect
        self.missing = missing


class EndpointIdentityMismatchError(ForgeError):
    """Edge endpoint is a different node instance than the one stored in the graph."""
    def __init__(
        self, cause: str, effect: str, argument: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.edge = edge_label(cause, effect)
        ctx.argument = argument
        super().__init__(
            f"Edge {edge_label(cause, effect)!r} endpoint {argument!r} "
            "is not the graph's node instance",
            "ENDPOINT_IDENTITY_MISMATCH", ErrorCategory.GRAPH_STRUCTURE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.argument = argument


class EdgeNotFoundError(ForgeError):
    """Edge (cause, effect) is not present in the graph."""
    def __init__(self, cause: str, effect: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.edge = edge_label(cause, effect)
        super().__init__(
            f"Edge not found: {edge_label(cause, effect)!r}",
            "EDGE_NOT_FOUND", ErrorCategory.GRAPH_STRUCTURE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.cause = cause
        self.effect = effect


class DanglingReferenceError(ForgeError):
    """Graph document references a node or edge it does not define."""
    def __init__(self, section: str, reference: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"section": section, "reference": reference}
        super().__init__(
            f"Unresolved reference in {section}: {reference!r}",
            "DANGLING_REFERENCE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.section = section
        self.reference = reference


class MalformedGraphDocumentError(ForgeError):
    """Graph document is not valid JSON or lacks a required field."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed graph document: {message}",
            "MALFORMED_GRAPH_DOCUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class UnresolvedRebuttalTargetError(ForgeError):
    """A rebuttal record names a target node or edge that does not exist."""
    def __init__(self, target: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.argument = target
        super().__init__(
            f"Rebuttal target not found: {target!r}",
            "UNRESOLVED_REBUTTAL_TARGET", ErrorCategory.GRAPH_STRUCTURE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.target = target


class UnrecognizedVariantError(ForgeError):
    """A tagged-union discriminator carries a value no call site handles."""
    def __init__(
        self, union: str, value: str, code: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.debug_info = {"union": union, "value": value}
        super().__init__(
            f"Unrecognized {union}: {value!r}",
            code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.value = value


class UnrecognizedEnhancementTypeError(UnrecognizedVariantError):
    """Enhancement type is neither certainty nor uniqueness."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            "enhancement type", value, "UNRECOGNIZED_ENHANCEMENT_TYPE", context,
        )


class UnrecognizedRebuttalKindError(UnrecognizedVariantError):
    """Rebuttal kind or rebuttal type outside the known taxonomy."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            "rebuttal kind", value, "UNRECOGNIZED_REBUTTAL_KIND", context,
        )


class ResourceNotFoundError(ForgeError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class OracleCallError(ForgeError):
    """Oracle call failed: API error, timeout, refusal or non-conformant output."""
    def __init__(
        self,
        message: str,
        error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        category = (
            ErrorCategory.TIMEOUT if error_type == "timeout"
            else ErrorCategory.EXTERNAL_API
        )
        super().__init__(
            f"Oracle call failed ({error_type}): {message}",
            "ORACLE_CALL_FAILED", category,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.error_type = error_type
