"""Task reminder stub for Day Weaver.

Reminders are only acknowledged, never delivered: the result says the
reminder was queued, but nothing is sent.
"""

import logging
import re

from dayweaver.models.schedule import ReminderResult, ReminderStatus

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def send_task_reminder(task_text: str, task_deadline: str, recipient_email: str) -> ReminderResult:
    """Simulate queuing a reminder email for a task.

    Args:
        task_text: Task description
        task_deadline: Task deadline as shown to the user
        recipient_email: Address the reminder would go to

    Returns:
        ReminderResult with status 'queued', or 'failed' for a malformed address
    """
    if not recipient_email or not EMAIL_PATTERN.match(recipient_email):
        logger.warning("Reminder not queued: invalid recipient email")
        return ReminderResult(
            status=ReminderStatus.FAILED,
            message="Failed to queue reminder: invalid email address.",
        )

    logger.info(f"Simulating reminder to {recipient_email} for task {task_text[:50]!r} due {task_deadline}")
    return ReminderResult(
        status=ReminderStatus.QUEUED,
        message=f"Reminder for \"{task_text}\" will be sent to {recipient_email}. (Simulated)",
    )
