"""Task domain models and enums."""

from datetime import date
from enum import StrEnum

from pydantic import Field, field_validator

from src.domain.base import RecordModel


class Priority(StrEnum):
    """How urgent a task is; High earns a bonus on completion."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Category(StrEnum):
    """Life area a task belongs to."""

    WORK = "Work"
    PERSONAL = "Personal"
    HEALTH = "Health"
    LEARNING = "Learning"
    OTHER = "Other"


class Recurrence(StrEnum):
    """How often a completed task returns to the incomplete state."""

    NONE = "None"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


class Subtask(RecordModel):
    """Checklist item inside a task."""

    id: str = Field(..., description="Unique subtask ID")
    text: str = Field(..., description="Subtask title")
    completed: bool = Field(default=False, description="Whether the item is checked off")


class Task(RecordModel):
    """Task record as stored for an account."""

    id: str = Field(..., description="Unique task ID")
    text: str = Field(..., description="Task title")
    description: str | None = Field(default=None, description="Free-form notes")
    due_date: date | None = Field(default=None, description="Calendar day the task is due")
    priority: Priority = Field(default=Priority.LOW, description="Task priority")
    category: Category = Field(default=Category.OTHER, description="Task category")
    recurrence: Recurrence = Field(default=Recurrence.NONE, description="Reset policy once completed")
    completed: bool = Field(default=False, description="Whether the task is done")
    last_completed_date: date | None = Field(default=None, description="Day the task was last completed")
    created_at: int = Field(..., description="Creation timestamp in epoch milliseconds")
    subtasks: list[Subtask] = Field(default_factory=list, description="Ordered checklist")

    @field_validator("text")
    @classmethod
    def validate_text_not_blank(cls, v: str) -> str:
        """Reject titles made only of whitespace."""
        if not v.strip():
            raise ValueError("Task text cannot be empty")
        return v


class TaskDraft(RecordModel):
    """User input for a new task; only ``text`` is required."""

    text: str
    description: str | None = None
    due_date: date | None = None
    priority: Priority = Priority.LOW
    category: Category = Category.OTHER
    recurrence: Recurrence = Recurrence.NONE


class TaskUpdate(RecordModel):
    """Fields a user may change when editing a task. Unset fields are kept."""

    text: str | None = None
    description: str | None = None
    due_date: date | None = None
    priority: Priority | None = None
    category: Category | None = None
    recurrence: Recurrence | None = None
