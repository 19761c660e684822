"""Ordering helpers for Day Weaver.

Two orderings are used:
1. Recency: the default collection order (newest first)
2. Suggestion rank: priority, then deadline urgency, for the schedule prompt

Both are stable sorts, so equal keys keep their input order.
"""

from datetime import datetime
from typing import List

from dayweaver.models.task import Task
from dayweaver.models.constants import PRIORITY_RANK
from dayweaver.engine.classifier import parse_deadline


def sort_by_recency(tasks: List[Task]) -> List[Task]:
    """Sort tasks by creation time, newest first.

    Tasks without a creation timestamp go last. Ties keep input order.

    Args:
        tasks: Tasks to sort

    Returns:
        New list sorted newest first
    """
    return sorted(tasks, key=_created_at_sort_key, reverse=True)


def rank_for_suggestion(tasks: List[Task]) -> List[Task]:
    """Rank tasks for a schedule suggestion.

    Tasks are sorted:
    1. By priority (High, Medium, Low)
    2. Within priority, by deadline (earliest first)
    3. Tasks with unparseable deadlines after those with deadlines

    Args:
        tasks: Tasks to rank

    Returns:
        New list in suggestion order
    """
    return sorted(tasks, key=lambda task: (_priority_sort_key(task), _deadline_sort_key(task)))


def _created_at_sort_key(task: Task) -> tuple:
    """Sort key for recency: (has_created_at, timestamp)."""
    if task.created_at:
        return (1, task.created_at.timestamp())
    return (0, 0.0)


def _priority_sort_key(task: Task) -> int:
    return PRIORITY_RANK.get(task.priority, len(PRIORITY_RANK))


def _deadline_sort_key(task: Task) -> tuple:
    """Get sort key for deadline urgency.

    Returns:
        Tuple for sorting: (has_deadline: 0 or 1, deadline or datetime.max)
    """
    deadline = parse_deadline(task.deadline)
    if deadline:
        return (0, deadline)
    return (1, datetime.max)
