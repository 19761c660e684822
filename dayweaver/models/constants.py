"""Constants for Day Weaver.

This module centralizes all magic numbers and default values used throughout the application.
"""

from dayweaver.models.task import TaskPriority


# Task defaults
DEFAULT_PRIORITY = TaskPriority.MEDIUM

# Pagination
ITEMS_PER_PAGE = 5

# Search debounce delay (milliseconds)
DEBOUNCE_DELAY_MS = 300

# List keys, each with an independent page cursor
LIST_PENDING = "pending"
LIST_DONE = "done"
LIST_EXPIRED = "expired"
LIST_SEARCH = "search"
BUCKET_LIST_KEYS = (LIST_PENDING, LIST_DONE, LIST_EXPIRED)
LIST_KEYS = BUCKET_LIST_KEYS + (LIST_SEARCH,)

# Reactions offered on a task card
AVAILABLE_REACTIONS = ("👍", "❤️", "😂", "😮", "😢", "😠")

# Priority rank used when ordering tasks for a schedule suggestion (lower = first)
PRIORITY_RANK = {
    TaskPriority.HIGH.value: 0,
    TaskPriority.MEDIUM.value: 1,
    TaskPriority.LOW.value: 2,
}
