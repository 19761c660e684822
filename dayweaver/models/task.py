"""Task data model for Day Weaver."""

import re
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator


# Canonical deadline representation: "YYYY-MM-DD HH:mm", 24-hour clock, zero-padded
DEADLINE_FORMAT = "%Y-%m-%d %H:%M"
DEADLINE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$")


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def validate_deadline_string(value: str) -> str:
    """Ensure a deadline string is in canonical form and names a real instant.

    Raises:
        ValueError: If the string does not match ``YYYY-MM-DD HH:mm`` exactly
    """
    if not DEADLINE_PATTERN.match(value):
        raise ValueError("Deadline must use the format YYYY-MM-DD HH:mm")
    try:
        datetime.strptime(value, DEADLINE_FORMAT)
    except ValueError:
        raise ValueError(f"Deadline {value!r} is not a valid date and time")
    return value


def validate_entry_deadline(value: str) -> str:
    """Canonical deadline whose date is today or later."""
    validate_deadline_string(value)
    if datetime.strptime(value, DEADLINE_FORMAT).date() < date.today():
        raise ValueError("Deadline must be today or in the future.")
    return value


def validate_task_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("Task description is required.")
    return value


class Task(BaseModel):
    """Canonical Task model.

    Stored records are not re-validated against the deadline pattern: a
    malformed deadline coming back from the store is kept as-is and the
    classifier treats it as pending.
    """

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="Unique task identifier (assigned by the store)")
    text: str = Field(..., description="Task description")
    deadline: str = Field(..., description="Deadline as 'YYYY-MM-DD HH:mm'")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    note: Optional[str] = Field(None, description="Optional free-text note")
    is_completed: bool = Field(False, description="Whether the task is done")
    created_at: Optional[datetime] = Field(None, description="Task creation timestamp")
    reactions: Dict[str, NonNegativeInt] = Field(
        default_factory=dict,
        description="Emoji reaction counts (missing emoji count as zero)",
    )


class TaskDraft(BaseModel):
    """User-supplied fields for a new task (store assigns the rest)."""

    model_config = ConfigDict(use_enum_values=True)

    text: str = Field(..., min_length=1, description="Task description")
    deadline: str = Field(..., description="Deadline as 'YYYY-MM-DD HH:mm'")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    note: Optional[str] = Field(None, description="Optional free-text note")

    @field_validator("text")
    @classmethod
    def _check_text(cls, value: str) -> str:
        return validate_task_text(value)

    @field_validator("deadline")
    @classmethod
    def _check_deadline(cls, value: str) -> str:
        return validate_entry_deadline(value)


class TaskUpdate(BaseModel):
    """Partial task update. Only fields that were explicitly set are applied."""

    model_config = ConfigDict(use_enum_values=True)

    text: Optional[str] = Field(None, min_length=1)
    deadline: Optional[str] = None
    priority: Optional[TaskPriority] = None
    note: Optional[str] = None
    is_completed: Optional[bool] = None
    reactions: Optional[Dict[str, NonNegativeInt]] = None

    @field_validator("text")
    @classmethod
    def _check_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_task_text(value)

    @field_validator("deadline")
    @classmethod
    def _check_deadline(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_entry_deadline(value)

    def changes(self) -> dict:
        """Return only the explicitly supplied fields."""
        return self.model_dump(exclude_unset=True)
