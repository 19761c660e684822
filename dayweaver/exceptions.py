"""Exception types for Day Weaver.

Entry validation errors are pydantic ``ValidationError`` instances raised by
the task form and draft models. Deadline parse failures are not errors at
all: the classifier treats an unparseable deadline as pending.
"""


class DayWeaverError(Exception):
    """Base class for Day Weaver errors."""


class StoreUnavailable(DayWeaverError):
    """The task store could not complete a read or write."""


class TaskNotFound(DayWeaverError, LookupError):
    """No task exists with the given id."""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class GenerationFailed(DayWeaverError):
    """The schedule suggestion call failed or returned nothing usable."""
