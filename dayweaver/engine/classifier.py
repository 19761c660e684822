"""Task classification for Day Weaver.

Partitions a task collection into mutually exclusive buckets:

- done: completed tasks
- expired: not completed, deadline parses and lies strictly before ``now``
- pending: every other not-completed task, including tasks whose deadline
  cannot be parsed

Classification is a pure function of (tasks, now, search term). It never
reorders its input and never raises for malformed task data.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from dayweaver.models.board import TaskBucket
from dayweaver.models.task import DEADLINE_FORMAT, DEADLINE_PATTERN, Task


class Classification:
    """Result of classifying a task collection."""

    def __init__(self):
        self.matching: List[Task] = []
        self.done: List[Task] = []
        self.not_done: List[Task] = []
        self.expired: List[Task] = []
        self.pending: List[Task] = []

    def counts(self) -> Dict[str, int]:
        """Bucket sizes keyed by bucket name."""
        return {
            TaskBucket.PENDING.value: len(self.pending),
            TaskBucket.DONE.value: len(self.done),
            TaskBucket.EXPIRED.value: len(self.expired),
        }


def parse_deadline(value: object) -> Optional[datetime]:
    """Parse a canonical 'YYYY-MM-DD HH:mm' deadline.

    Args:
        value: Raw deadline value from a task record

    Returns:
        Naive datetime, or None if the value is not a canonical deadline
    """
    if not isinstance(value, str) or not DEADLINE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, DEADLINE_FORMAT)
    except ValueError:
        return None


def matches_search(task: Task, search_term: Optional[str]) -> bool:
    """Case-insensitive substring match on task text. Empty term matches all."""
    if not search_term:
        return True
    return search_term.lower() in (task.text or "").lower()


def is_expired(task: Task, now: datetime) -> bool:
    """Check if a not-completed task's deadline is strictly before now.

    Deadlines are wall-clock values; an aware ``now`` is compared against
    the deadline read in ``now``'s own timezone.
    """
    if task.is_completed:
        return False
    deadline = parse_deadline(task.deadline)
    if deadline is None:
        return False
    if now.tzinfo is not None:
        deadline = deadline.replace(tzinfo=now.tzinfo)
    return deadline < now


def bucket_for(task: Task, now: datetime) -> TaskBucket:
    """Return the single bucket a task belongs to at ``now``."""
    if task.is_completed:
        return TaskBucket.DONE
    if is_expired(task, now):
        return TaskBucket.EXPIRED
    return TaskBucket.PENDING


def classify(tasks: Iterable[Task], now: datetime, search_term: Optional[str] = None) -> Classification:
    """Classify tasks into done / expired / pending after applying the search filter.

    Args:
        tasks: Task collection (order is preserved in every output list)
        now: Reference instant
        search_term: Optional committed search term

    Returns:
        Classification with matching, done, not_done, expired and pending lists
    """
    result = Classification()
    for task in tasks:
        if not matches_search(task, search_term):
            continue
        result.matching.append(task)

        bucket = bucket_for(task, now)
        if bucket == TaskBucket.DONE:
            result.done.append(task)
            continue

        result.not_done.append(task)
        if bucket == TaskBucket.EXPIRED:
            result.expired.append(task)
        else:
            result.pending.append(task)
    return result
