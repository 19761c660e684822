"""Repository layer for task store operations."""

import logging
from typing import List, Optional, Union
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from dayweaver.exceptions import StoreUnavailable, TaskNotFound
from dayweaver.models.task import Task, TaskDraft, TaskUpdate
from dayweaver.models.task_factory import task_from_draft
from dayweaver.database.models import TaskDB, enum_to_value

logger = logging.getLogger(__name__)

# Columns that cannot be cleared through a partial update
REQUIRED_FIELDS = {"text", "deadline", "priority", "is_completed"}


class TaskRepository:
    """Repository for Task database operations.

    Any database failure is rolled back, logged and re-raised as
    StoreUnavailable so callers deal with one failure kind.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Task]:
        """Get all tasks sorted by creation date (newest first)."""
        try:
            tasks_db = self.db.query(TaskDB).order_by(desc(TaskDB.created_at)).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to list tasks: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Could not load tasks from the database.") from e
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        try:
            task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to get task {task_id}: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Could not load the task.") from e
        return task_db.to_pydantic() if task_db else None

    def create(self, draft: TaskDraft) -> Task:
        """Create a new task; the store assigns id and created_at."""
        task = task_from_draft(draft)
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.text[:50]}")
            return task_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Could not save the task.") from e

    def update(self, task_id: str, fields: Union[TaskUpdate, dict]) -> Task:
        """Apply a partial update. Only supplied fields are changed.

        Raises:
            TaskNotFound: If no task has this id
            StoreUnavailable: If the database write fails
        """
        if isinstance(fields, TaskUpdate):
            changes = fields.changes()
        else:
            changes = TaskUpdate(**fields).changes()

        try:
            task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to load task {task_id} for update: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Could not update the task.") from e
        if not task_db:
            raise TaskNotFound(task_id)

        for name, value in changes.items():
            if value is None and name in REQUIRED_FIELDS:
                continue
            if name == "priority":
                value = enum_to_value(value)
            elif name == "reactions":
                # Assign a new dict so the JSON column is flagged dirty
                value = dict(value or {})
            setattr(task_db, name, value)

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task_id}: {sorted(changes)}")
            return task_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task_id}: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Could not update the task.") from e

    def delete(self, task_id: str) -> bool:
        """Delete a task by ID. Returns False if it did not exist."""
        try:
            task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
            if not task_db:
                return False
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Could not delete the task.") from e

    def delete_all(self) -> int:
        """Delete every task in one transaction (all or nothing).

        Returns:
            Number of tasks deleted
        """
        try:
            affected = self.db.query(TaskDB).delete(synchronize_session=False)
            self.db.commit()
            logger.debug(f"Deleted all {affected} tasks")
            return int(affected)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete all tasks: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Could not delete all tasks.") from e
