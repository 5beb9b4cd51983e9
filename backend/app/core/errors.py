"""Error Hierarchy: typed, categorized exceptions for all match-engine failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised before any mutation; infrastructure errors
      (500-level) are raised after the transaction rolled back
    - to_response() produces the REST envelope; debug_info surfaces as "details"
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DominoError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging framework
    - No imports from other core modules (domain_types imports from here)
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
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    game_id: str | None = None
    player_id: str | None = None
    round_index: int | None = None
    debug_info: dict[str, Any] | None = None


class DominoError(Exception):
    """Base exception for all score-tracker errors."""

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
                    "game_id": self.context.game_id,
                    "player_id": self.context.player_id,
                    "round_index": self.context.round_index,
                },
                **({"details": self.context.debug_info} if self.context.debug_info else {}),
            }
        }


# ─── Validation Errors (400) ────────────────────────────────────

class ScoreValidationError(DominoError):
    """Round score map is malformed (negative, non-integer, wrong player set)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"field": field}
        super().__init__(
            message, "INVALID_SCORES", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class PlayerCountError(DominoError):
    """Game seated with a player count outside the allowed range."""
    def __init__(
        self, count: int, minimum: int, maximum: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"A game requires {minimum} to {maximum} players, got {count}",
            "INVALID_PLAYER_COUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.count = count


class DuplicatePlayerError(DominoError):
    """Same player listed for more than one seat."""
    def __init__(self, player_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.player_id = player_id
        super().__init__(
            f"Player '{player_id}' is seated more than once",
            "DUPLICATE_PLAYER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class RoundOutOfOrderError(DominoError):
    """Submitted round index does not match the game's current round."""
    def __init__(
        self, expected: int, submitted: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.round_index = submitted
        super().__init__(
            f"Round {submitted} cannot be submitted; current round is {expected}",
            "ROUND_OUT_OF_ORDER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.expected = expected
        self.submitted = submitted


class RoundOutOfRangeError(DominoError):
    """Round index has no sequencer value (match over or not reached yet)."""
    def __init__(self, round_index: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.round_index = round_index
        super().__init__(
            f"Round {round_index} is not available",
            "ROUND_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class BlankPlayerNameError(DominoError):
    """Player name is empty after trimming."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Player name cannot be blank",
            "PLAYER_NAME_BLANK", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Conflict / State Guard Errors (409) ────────────────────────

class PlayerNameTakenError(DominoError):
    """Another player already uses this name."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Player name '{name}' is already taken",
            "PLAYER_NAME_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.name = name


class PlayerInUseError(DominoError):
    """Player is seated in at least one game and cannot be deleted."""
    def __init__(self, player_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.player_id = player_id
        super().__init__(
            "Player is seated in a game and cannot be deleted",
            "PLAYER_IN_USE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


class InvalidGameStateError(DominoError):
    """Command not allowed in the game's current status."""
    def __init__(
        self, action: str, status: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot {action} a game that is {status}",
            "INVALID_GAME_STATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.action = action
        self.status = status


class ResourceNotFoundError(DominoError):
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


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DominoError):
    """Database operation failed; the transaction was rolled back."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class UnknownGameStatusError(DominoError):
    """Stored game status is not one of the known values."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown game status '{value}'",
            "UNKNOWN_GAME_STATUS", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.value = value
