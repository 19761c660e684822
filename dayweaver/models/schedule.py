"""Schedule suggestion and reminder models for Day Weaver."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dayweaver.models.task import TaskPriority


class ScheduleRequestItem(BaseModel):
    """One task as sent to the schedule suggestion prompt."""

    model_config = ConfigDict(use_enum_values=True)

    task: str = Field(..., description="Task name")
    deadline: str = Field(..., description="Deadline (YYYY-MM-DD HH:mm)")
    priority: TaskPriority = Field(..., description="Task priority")
    duration_estimate: Optional[str] = Field(None, description="Estimated duration (e.g. 1h, 30m)")


class ScheduledTask(ScheduleRequestItem):
    """A task placed in the suggested schedule."""

    start_time: str = Field(..., description="Suggested start time (HH:mm)")
    end_time: str = Field(..., description="Suggested end time (HH:mm)")


class ScheduleSuggestion(BaseModel):
    """Proposed time-boxed schedule plus free-text notes."""

    schedule: List[ScheduledTask] = Field(default_factory=list, description="Ordered schedule")
    notes: Optional[str] = Field(None, description="Notes or suggestions for the user")


class ReminderStatus(str, Enum):
    """Reminder acknowledgement status."""
    QUEUED = "queued"
    FAILED = "failed"


class ReminderResult(BaseModel):
    """Non-authoritative acknowledgement of a reminder request."""

    model_config = ConfigDict(use_enum_values=True)

    status: ReminderStatus
    message: str
