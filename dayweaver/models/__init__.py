"""Data models for Day Weaver."""

from dayweaver.models.task import Task, TaskDraft, TaskUpdate, TaskPriority, DEADLINE_FORMAT
from dayweaver.models.forms import TaskForm
from dayweaver.models.board import BoardView, PageView, Notification, NotificationVariant, TaskBucket
from dayweaver.models.schedule import (
    ScheduleRequestItem,
    ScheduledTask,
    ScheduleSuggestion,
    ReminderResult,
    ReminderStatus,
)

__all__ = [
    "Task",
    "TaskDraft",
    "TaskUpdate",
    "TaskPriority",
    "DEADLINE_FORMAT",
    "TaskForm",
    "BoardView",
    "PageView",
    "Notification",
    "NotificationVariant",
    "TaskBucket",
    "ScheduleRequestItem",
    "ScheduledTask",
    "ScheduleSuggestion",
    "ReminderResult",
    "ReminderStatus",
]
