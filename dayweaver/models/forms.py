"""Entry form model for creating and editing tasks.

Mirrors the add/edit task form: a date picker, an ``HH:MM`` time field,
a priority select and an optional note. Form data that fails validation
never reaches the store or the classifier.
"""

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dayweaver.models.task import TaskDraft, TaskPriority, TaskUpdate


TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class TaskForm(BaseModel):
    """Validated task form submission."""

    model_config = ConfigDict(use_enum_values=True)

    text: str = Field(..., description="Task description")
    deadline_date: date = Field(..., description="Deadline date (today or later)")
    deadline_time: str = Field(..., description="Deadline time as HH:MM")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    note: Optional[str] = Field(None, description="Optional note")

    @field_validator("text")
    @classmethod
    def _text_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Task description is required.")
        return value

    @field_validator("deadline_date")
    @classmethod
    def _not_in_past(cls, value: date) -> date:
        if value < date.today():
            raise ValueError("Deadline must be today or in the future.")
        return value

    @field_validator("deadline_time")
    @classmethod
    def _time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Invalid time format (HH:MM).")
        return value

    @property
    def deadline(self) -> str:
        return f"{self.deadline_date:%Y-%m-%d} {self.deadline_time}"

    def to_draft(self) -> TaskDraft:
        """Build the store draft with the canonical deadline string."""
        return TaskDraft(
            text=self.text,
            deadline=self.deadline,
            priority=self.priority,
            note=self.note or None,
        )

    def to_update(self) -> TaskUpdate:
        """Build a partial update carrying the edited fields only."""
        return TaskUpdate(
            text=self.text,
            deadline=self.deadline,
            priority=self.priority,
            note=self.note or None,
        )
