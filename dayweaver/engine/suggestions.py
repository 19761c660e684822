"""Schedule suggestion input for Day Weaver.

Only actionable tasks are offered to the suggestion prompt: completed and
expired tasks are left out. Tasks are ranked deterministically before
being sent so the same collection always produces the same request.
"""

from datetime import datetime
from typing import List

from dayweaver.models.schedule import ScheduleRequestItem
from dayweaver.models.task import Task
from dayweaver.engine.classifier import classify
from dayweaver.engine.ordering import rank_for_suggestion


def build_schedule_request(tasks: List[Task], now: datetime) -> List[ScheduleRequestItem]:
    """Map pending tasks to schedule request items.

    Args:
        tasks: Task collection
        now: Reference instant for expiry

    Returns:
        Request items, High priority first, then earliest deadline
    """
    pending = classify(tasks, now).pending
    return [
        ScheduleRequestItem(
            task=task.text,
            deadline=task.deadline,
            priority=task.priority,
        )
        for task in rank_for_suggestion(pending)
    ]
