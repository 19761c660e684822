"""Task creation factory for Day Weaver.

This module centralizes task creation logic and ensures consistent
default values for store-assigned fields.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dayweaver.models.task import Task, TaskDraft, TaskPriority
from dayweaver.models.constants import DEFAULT_PRIORITY


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (the store keeps naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary.

    Returns:
        Dictionary with default task field values using constants
    """
    return {
        "priority": DEFAULT_PRIORITY,
        "note": None,
        "is_completed": False,
        "reactions": {},
    }


def create_task_base(
    text: str,
    deadline: str,
    priority: Optional[TaskPriority] = None,
    note: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Task:
    """Create a task with a fresh id and creation timestamp.

    Args:
        text: Task description (required)
        deadline: Deadline as 'YYYY-MM-DD HH:mm'
        priority: Task priority (defaults to Medium)
        note: Optional note
        created_at: Creation timestamp (defaults to now, UTC)

    Returns:
        Task object with defaults applied
    """
    defaults = create_task_defaults()
    return Task(
        id=str(uuid.uuid4()),
        text=text,
        deadline=deadline,
        priority=priority if priority is not None else defaults["priority"],
        note=note if note is not None else defaults["note"],
        is_completed=defaults["is_completed"],
        created_at=created_at or utc_now(),
        reactions=defaults["reactions"],
    )


def task_from_draft(draft: TaskDraft, created_at: Optional[datetime] = None) -> Task:
    """Turn a validated draft into a new task record."""
    return create_task_base(
        text=draft.text,
        deadline=draft.deadline,
        priority=draft.priority,
        note=draft.note,
        created_at=created_at,
    )
