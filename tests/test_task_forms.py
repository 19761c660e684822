"""Tests for task entry validation (form, draft and partial update)."""

import pytest
from datetime import date, datetime, timedelta, timezone
from pydantic import ValidationError

from dayweaver.models.forms import TaskForm
from dayweaver.models.task import TaskDraft, TaskUpdate
from dayweaver.models.task_factory import create_task_base, task_from_draft, utc_now


class TestTaskForm:
    """Test TaskForm validation and conversion."""

    def test_valid_form_builds_canonical_deadline(self, future_date):
        form = TaskForm(text="Buy milk", deadline_date=future_date, deadline_time="09:05", priority="High")

        draft = form.to_draft()

        assert draft.deadline == f"{future_date:%Y-%m-%d} 09:05"
        assert draft.priority == "High"
        assert draft.note is None

    def test_today_is_allowed(self):
        form = TaskForm(text="Today", deadline_date=date.today(), deadline_time="23:59")
        assert form.deadline.startswith(f"{date.today():%Y-%m-%d}")

    def test_past_date_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskForm(text="Late", deadline_date=date.today() - timedelta(days=1), deadline_time="10:00")
        assert "Deadline must be today or in the future." in str(exc_info.value)

    @pytest.mark.parametrize("value", ["24:00", "9:00", "12:60", "noon", "12:00:00"])
    def test_bad_time_rejected(self, future_date, value):
        with pytest.raises(ValidationError) as exc_info:
            TaskForm(text="Task", deadline_date=future_date, deadline_time=value)
        assert "Invalid time format (HH:MM)." in str(exc_info.value)

    def test_blank_text_rejected(self, future_date):
        with pytest.raises(ValidationError) as exc_info:
            TaskForm(text="   ", deadline_date=future_date, deadline_time="10:00")
        assert "Task description is required." in str(exc_info.value)

    def test_unknown_priority_rejected(self, future_date):
        with pytest.raises(ValidationError):
            TaskForm(text="Task", deadline_date=future_date, deadline_time="10:00", priority="Urgent")

    def test_empty_note_becomes_none(self, future_date):
        form = TaskForm(text="Task", deadline_date=future_date, deadline_time="10:00", note="")
        assert form.to_update().note is None

    def test_to_update_does_not_touch_completion_or_reactions(self, future_date):
        form = TaskForm(text="Task", deadline_date=future_date, deadline_time="10:00")
        changes = form.to_update().changes()
        assert "is_completed" not in changes
        assert "reactions" not in changes


class TestDraftAndUpdate:
    """Test TaskDraft and TaskUpdate models."""

    def test_draft_rejects_non_canonical_deadline(self):
        with pytest.raises(ValidationError):
            TaskDraft(text="Task", deadline="2024-01-01T10:00")

    def test_draft_rejects_impossible_date(self):
        with pytest.raises(ValidationError):
            TaskDraft(text="Task", deadline="2024-02-30 10:00")

    def test_draft_rejects_past_deadline(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskDraft(text="Task", deadline="2000-01-01 00:00")
        assert "Deadline must be today or in the future." in str(exc_info.value)

    def test_update_rejects_blank_text(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskUpdate(text="   ")
        assert "Task description is required." in str(exc_info.value)

    def test_update_rejects_past_deadline(self):
        with pytest.raises(ValidationError):
            TaskUpdate(deadline="2000-01-01 00:00")

    def test_update_accepts_today(self):
        today = f"{date.today():%Y-%m-%d} 00:00"
        assert TaskUpdate(deadline=today).deadline == today

    def test_update_changes_only_set_fields(self):
        update = TaskUpdate(is_completed=True)
        assert update.changes() == {"is_completed": True}

    def test_update_rejects_negative_reaction(self):
        with pytest.raises(ValidationError):
            TaskUpdate(reactions={"👍": -1})


class TestTaskFactory:
    """Test task creation defaults."""

    def test_create_task_base_defaults(self):
        task = create_task_base(text="Task", deadline="2099-01-01 00:00")

        assert task.id
        assert task.priority == "Medium"
        assert task.note is None
        assert task.is_completed is False
        assert task.reactions == {}
        assert task.created_at is not None

    def test_task_from_draft_assigns_unique_ids(self):
        draft = TaskDraft(text="Task", deadline="2099-01-01 00:00", priority="Low", note="n")

        first = task_from_draft(draft)
        second = task_from_draft(draft)

        assert first.id != second.id
        assert first.priority == "Low"
        assert first.note == "n"

    def test_utc_now_is_naive_utc(self):
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        now = utc_now()
        after = datetime.now(timezone.utc).replace(tzinfo=None)

        assert now.tzinfo is None
        assert before <= now <= after

    def test_created_at_is_naive(self):
        task = create_task_base(text="Task", deadline="2099-01-01 00:00")
        assert task.created_at.tzinfo is None
