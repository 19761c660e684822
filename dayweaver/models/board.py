"""Board view models for Day Weaver."""

from datetime import datetime
from typing import Dict, List
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from dayweaver.models.task import Task


class TaskBucket(str, Enum):
    """Mutually exclusive classification bucket."""
    PENDING = "pending"
    DONE = "done"
    EXPIRED = "expired"


class NotificationVariant(str, Enum):
    """Notification severity."""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """User-visible, non-blocking notification."""

    model_config = ConfigDict(use_enum_values=True)

    title: str
    description: str = ""
    variant: NotificationVariant = NotificationVariant.DEFAULT


class PageView(BaseModel):
    """One page of a paginated list."""

    list_key: str = Field(..., description="List key (pending, done, expired, search)")
    items: List[Task] = Field(default_factory=list, description="Tasks on the current page")
    page: int = Field(1, ge=1, description="Resolved current page")
    total_pages: int = Field(0, ge=0, description="Number of pages for the full list")
    total_items: int = Field(0, ge=0, description="Number of tasks in the full list")


class BoardView(BaseModel):
    """Everything a view needs, derived from one collection snapshot."""

    now: datetime = Field(..., description="Reference instant used for classification")
    search_input: str = Field("", description="Raw search box value")
    search_term: str = Field("", description="Committed (debounced) search term")
    is_debouncing: bool = Field(False, description="Whether a search commit is pending")
    search_mode: bool = Field(False, description="Whether the search list replaces the tabs")
    counts: Dict[str, int] = Field(default_factory=dict, description="Bucket sizes")
    pending: PageView
    done: PageView
    expired: PageView
    search: PageView
