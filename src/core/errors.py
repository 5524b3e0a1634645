"""Domain exceptions and error classification for user-facing messages."""

from enum import Enum

from pydantic import BaseModel


class ErrorCategory(Enum):
    """Categories of errors that can occur while changing session state."""

    VALIDATION = "validation"
    INSUFFICIENT_XP = "insufficient_xp"
    NOT_FOUND = "not_found"
    INVALID_RECURRENCE_PATTERN = "invalid_recurrence_pattern"
    STORAGE = "storage"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Validation errors
    ERR_EMPTY_TASK_TEXT = "ERR_EMPTY_TASK_TEXT"
    ERR_INVALID_REWARD = "ERR_INVALID_REWARD"
    ERR_INVALID_USERNAME = "ERR_INVALID_USERNAME"
    ERR_INVALID_THEME = "ERR_INVALID_THEME"
    ERR_INVALID_RECURRENCE_PATTERN = "ERR_INVALID_RECURRENCE_PATTERN"

    # Economy errors
    ERR_INSUFFICIENT_XP = "ERR_INSUFFICIENT_XP"

    # Lookup errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_REWARD_NOT_FOUND = "ERR_REWARD_NOT_FOUND"

    # Storage errors
    ERR_STORAGE = "ERR_STORAGE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class TaskQuestError(Exception):
    """Base class for errors raised by session operations."""

    category: ErrorCategory = ErrorCategory.UNKNOWN


class TaskValidationError(TaskQuestError, ValueError):
    """A task or subtask draft was rejected (e.g. blank text)."""

    category = ErrorCategory.VALIDATION


class RewardValidationError(TaskQuestError, ValueError):
    """A custom reward draft was rejected (blank name, non-positive cost)."""

    category = ErrorCategory.VALIDATION


class UsernameValidationError(TaskQuestError, ValueError):
    """A username change was rejected."""

    category = ErrorCategory.VALIDATION


class ThemeValidationError(TaskQuestError, ValueError):
    """A theme change named a theme that doesn't exist."""

    category = ErrorCategory.VALIDATION


class InsufficientXPError(TaskQuestError):
    """A reward costs more XP than the account holds."""

    category = ErrorCategory.INSUFFICIENT_XP

    def __init__(self, *, reward_name: str, cost: int, available: int) -> None:
        self.reward_name = reward_name
        self.cost = cost
        self.available = available
        super().__init__(f"Not enough XP to redeem {reward_name}: costs {cost}, have {available}")


class TaskNotFoundError(TaskQuestError, KeyError):
    """No task with the requested id exists in the session."""

    category = ErrorCategory.NOT_FOUND

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Task not found"


class RewardNotFoundError(TaskQuestError, KeyError):
    """No reward with the requested id exists in the catalog or custom rewards."""

    category = ErrorCategory.NOT_FOUND

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Reward not found"


class StorageError(TaskQuestError):
    """The key-value backend failed to read or write."""

    category = ErrorCategory.STORAGE


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


def classify_error(exception: Exception) -> ErrorCategory:
    """Return the category of an exception raised by a session operation."""
    if isinstance(exception, TaskQuestError):
        return exception.category
    if isinstance(exception, ValueError) and "recurrence" in str(exception).lower():
        return ErrorCategory.INVALID_RECURRENCE_PATTERN
    return ErrorCategory.UNKNOWN


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during a session operation

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, TaskValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_EMPTY_TASK_TEXT,
            message="A task needs a title.",
            suggestion="Type something before adding the task.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, RewardValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_REWARD,
            message="That reward can't be created.",
            suggestion="Give the reward a name and a cost above zero.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, UsernameValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_USERNAME,
            message="Username can't be empty.",
            suggestion="Pick a name with at least one visible character.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, ThemeValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_THEME,
            message="That theme isn't available.",
            suggestion="Choose 'light', 'dark' or 'system'.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, InsufficientXPError):
        return ErrorResponse(
            code=ErrorCode.ERR_INSUFFICIENT_XP,
            message="Not enough XP!",
            suggestion=f"You need {exception.cost - exception.available} more XP. Complete a few tasks first.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, TaskNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_TASK_NOT_FOUND,
            message="I couldn't find that task.",
            suggestion="It may have been deleted. Refresh your task list.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, RewardNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_REWARD_NOT_FOUND,
            message="I couldn't find that reward.",
            suggestion="It may have been deleted. Refresh the reward list.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, StorageError):
        return ErrorResponse(
            code=ErrorCode.ERR_STORAGE,
            message="Your progress couldn't be saved.",
            suggestion="Try again. If the problem persists, check available disk space.",
            severity=ErrorSeverity.HIGH,
        )

    if classify_error(exception) == ErrorCategory.INVALID_RECURRENCE_PATTERN:
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_RECURRENCE_PATTERN,
            message="Invalid recurrence pattern.",
            suggestion="Use 'none', 'daily', 'weekly' or 'monthly'.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again. If the problem persists, reload the app.",
        severity=ErrorSeverity.MEDIUM,
    )
