"""SQLAlchemy database models for Day Weaver."""

from typing import Type, TypeVar, Union
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, JSON

from dayweaver.database.database import Base
from dayweaver.models.task import Task, TaskPriority
from dayweaver.models.task_factory import utc_now

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value)
    except (ValueError, AttributeError):
        pass
    # Tolerate case drift in stored values ("high" -> High)
    try:
        return enum_class(value.capitalize())
    except (ValueError, AttributeError):
        return default


def clean_reactions(raw) -> dict:
    """Keep only emoji entries with a non-negative integer count."""
    if not isinstance(raw, dict):
        return {}
    reactions = {}
    for emoji, count in raw.items():
        if isinstance(count, int) and not isinstance(count, bool) and count >= 0:
            reactions[str(emoji)] = count
    return reactions


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Basic fields
    text = Column(String, nullable=False)
    # Stored verbatim; classification tolerates malformed values
    deadline = Column(String, nullable=False)
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value)
    note = Column(String, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=True, default=utc_now, index=True)

    # Reactions (stored as JSON object emoji -> count)
    reactions = Column(JSON, nullable=False, default=dict)

    def to_pydantic(self) -> Task:
        """Convert database model to Pydantic model."""
        return Task(
            id=self.id,
            text=self.text,
            deadline=self.deadline,
            priority=value_to_enum(self.priority, TaskPriority, TaskPriority.MEDIUM),
            note=self.note,
            is_completed=bool(self.is_completed),
            created_at=self.created_at,
            reactions=clean_reactions(self.reactions),
        )

    @classmethod
    def from_pydantic(cls, task: Task) -> "TaskDB":
        """Create database model from Pydantic model."""
        return cls(
            id=task.id,
            text=task.text,
            deadline=task.deadline,
            priority=enum_to_value(task.priority),
            note=task.note,
            is_completed=task.is_completed,
            created_at=task.created_at,
            reactions=dict(task.reactions),
        )
