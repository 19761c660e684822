"""Tests for the simulated task reminder."""

import pytest

from dayweaver.integrations.reminders import send_task_reminder


class TestSendTaskReminder:
    """Test send_task_reminder() acknowledgements."""

    def test_valid_email_is_queued(self):
        result = send_task_reminder("Call mum", "2099-01-01 18:00", "me@example.com")

        assert result.status == "queued"
        assert result.message == 'Reminder for "Call mum" will be sent to me@example.com. (Simulated)'

    @pytest.mark.parametrize("email", ["", "me", "me@", "me@example", "a b@example.com"])
    def test_invalid_email_fails(self, email):
        result = send_task_reminder("Call mum", "2099-01-01 18:00", email)

        assert result.status == "failed"
        assert result.message == "Failed to queue reminder: invalid email address."
