"""Planner session for Day Weaver.

TaskPlanner is the single owner of the in-memory task collection for one
UI session, together with its page state and search debouncer. Every
mutation goes to the store first; the local collection is patched only
once the store call has succeeded. Failures become notifications and leave
the session usable.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional, Union

from dayweaver.exceptions import GenerationFailed, StoreUnavailable, TaskNotFound
from dayweaver.database.repository import TaskRepository
from dayweaver.engine.board import compose_board
from dayweaver.engine.ordering import sort_by_recency
from dayweaver.engine.pagination import PaginationController
from dayweaver.engine.search import DEBOUNCE_DELAY_SECONDS, CallLater, SearchDebouncer
from dayweaver.engine.suggestions import build_schedule_request
from dayweaver.integrations.openai_client import OpenAIClient
from dayweaver.integrations.reminders import send_task_reminder
from dayweaver.models.board import BoardView, Notification, NotificationVariant
from dayweaver.models.constants import AVAILABLE_REACTIONS, ITEMS_PER_PAGE
from dayweaver.models.forms import TaskForm
from dayweaver.models.schedule import ReminderResult, ReminderStatus, ScheduleSuggestion
from dayweaver.models.task import Task, TaskDraft, TaskUpdate

logger = logging.getLogger(__name__)


class TaskPlanner:
    """Owns one session's task collection, page state and search state."""

    def __init__(
        self,
        repository: TaskRepository,
        page_size: int = ITEMS_PER_PAGE,
        debounce_delay: float = DEBOUNCE_DELAY_SECONDS,
        call_later: Optional[CallLater] = None,
        openai_client: Optional[OpenAIClient] = None,
    ):
        self.repository = repository
        self.tasks: List[Task] = []
        self.pagination = PaginationController(page_size=page_size)
        self.search = SearchDebouncer(
            on_commit=self._on_search_commit,
            delay=debounce_delay,
            call_later=call_later,
        )
        self.openai_client = openai_client
        self.notifications: List[Notification] = []
        self._commit_listeners = []

    # ---------- notifications ----------

    def notify(self, title: str, description: str = "", destructive: bool = False) -> None:
        variant = NotificationVariant.DESTRUCTIVE if destructive else NotificationVariant.DEFAULT
        self.notifications.append(Notification(title=title, description=description, variant=variant))

    def drain_notifications(self) -> List[Notification]:
        """Return and clear pending notifications."""
        drained, self.notifications = self.notifications, []
        return drained

    # ---------- store sync ----------

    def load(self) -> List[Task]:
        """Replace the collection with the store's contents.

        On failure the collection falls back to empty.
        """
        try:
            self.tasks = self.repository.list_all()
        except StoreUnavailable:
            self.tasks = []
            self.notify("Error Fetching Tasks", "Could not load tasks from the database.", destructive=True)
        return self.tasks

    def find(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def _replace(self, updated: Task) -> None:
        self.tasks = [updated if task.id == updated.id else task for task in self.tasks]

    def add_task(self, submission: Union[TaskForm, TaskDraft]) -> Optional[Task]:
        """Create a task and merge it into the collection (newest first)."""
        draft = submission.to_draft() if isinstance(submission, TaskForm) else submission
        try:
            task = self.repository.create(draft)
        except StoreUnavailable:
            self.notify("Error Adding Task", "Could not save the task.", destructive=True)
            return None
        self.tasks = sort_by_recency([task] + self.tasks)
        self.notify("Task Added", f"\"{task.text}\" has been added.")
        return task

    def update_task(self, task_id: str, fields: Union[TaskForm, TaskUpdate, dict], announce: bool = True) -> Optional[Task]:
        """Apply a partial update remotely, then locally."""
        if isinstance(fields, TaskForm):
            fields = fields.to_update()
        try:
            updated = self.repository.update(task_id, fields)
        except TaskNotFound:
            self.notify("Error Updating Task", "The task no longer exists.", destructive=True)
            return None
        except StoreUnavailable:
            self.notify("Error Updating Task", "Could not update the task.", destructive=True)
            return None
        self._replace(updated)
        if announce:
            self.notify("Task Updated", f"\"{updated.text}\" has been updated.")
        return updated

    def toggle_complete(self, task_id: str) -> Optional[Task]:
        task = self.find(task_id)
        if task is None:
            return None
        return self.update_task(task_id, TaskUpdate(is_completed=not task.is_completed), announce=False)

    def add_reaction(self, task_id: str, emoji: str) -> Optional[Task]:
        """Increment one emoji's reaction count."""
        task = self.find(task_id)
        if task is None:
            return None
        if emoji not in AVAILABLE_REACTIONS:
            self.notify("Unknown Reaction", f"{emoji} is not an available reaction.", destructive=True)
            return None
        reactions = dict(task.reactions)
        reactions[emoji] = reactions.get(emoji, 0) + 1
        updated = self.update_task(task_id, TaskUpdate(reactions=reactions), announce=False)
        if updated is not None:
            self.notify("Reaction Added!", f"You reacted with {emoji} to \"{updated.text}\".")
        return updated

    def delete_task(self, task_id: str) -> bool:
        try:
            self.repository.delete(task_id)
        except StoreUnavailable:
            self.notify("Error Deleting Task", "Could not delete the task.", destructive=True)
            return False
        self.tasks = [task for task in self.tasks if task.id != task_id]
        self.notify("Task Deleted", "The task has been removed.")
        return True

    def delete_all(self) -> int:
        """Delete every task; the collection is only cleared if the store agreed."""
        if not self.tasks:
            return 0
        try:
            deleted = self.repository.delete_all()
        except StoreUnavailable:
            self.notify("Error Deleting All Tasks", "Could not delete all tasks.", destructive=True)
            return 0
        self.tasks = []
        self.notify("All Tasks Deleted", "All tasks have been removed from the database.", destructive=True)
        return deleted

    # ---------- search & pagination ----------

    def add_commit_listener(self, listener) -> None:
        """Register a callable invoked with each committed search term."""
        self._commit_listeners.append(listener)

    def _on_search_commit(self, term: str) -> None:
        self.pagination.sync_search_term(term)
        for listener in self._commit_listeners:
            listener(term)

    def set_search_input(self, value: Optional[str]) -> None:
        self.search.set_input(value)

    def change_page(self, list_key: str, page: Any) -> None:
        self.pagination.change_page(list_key, page)

    def board(self, now: Optional[datetime] = None) -> BoardView:
        """Compose the board from one snapshot of the collection."""
        return compose_board(
            list(self.tasks),
            now or datetime.now(),
            self.pagination,
            search_input=self.search.raw_value,
            search_term=self.search.committed_term,
            is_debouncing=self.search.is_debouncing,
        )

    def close(self) -> None:
        self.search.cancel()

    # ---------- schedule suggestion & reminders ----------

    def suggest_schedule(self, now: Optional[datetime] = None) -> Optional[ScheduleSuggestion]:
        """Request a schedule suggestion for the pending tasks."""
        items = build_schedule_request(list(self.tasks), now or datetime.now())
        if not items:
            self.notify("Nothing to Schedule", "Add a pending task before generating a schedule.")
            return None
        client = self.openai_client or OpenAIClient()
        try:
            return client.generate_daily_schedule(items)
        except GenerationFailed as e:
            self.notify("Schedule Generation Failed", str(e), destructive=True)
            return None

    def send_reminder(self, task_id: str, recipient_email: str) -> Optional[ReminderResult]:
        task = self.find(task_id)
        if task is None:
            return None
        result = send_task_reminder(task.text, task.deadline, recipient_email)
        self.notify("Reminder", result.message, destructive=result.status == ReminderStatus.FAILED)
        return result
