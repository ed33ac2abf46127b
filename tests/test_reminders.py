"""Mini README: Tests for reminder status classification.

``classify`` is pure, so these tests build reminders directly rather than
going through the store.
"""

from __future__ import annotations

from datetime import date, datetime

from khata.ledger import (
    Reminder,
    ReminderStatus,
    ReminderType,
    classify,
    pending_reminders,
    with_current_status,
)


def _reminder(due_on: date, status: ReminderStatus = ReminderStatus.UPCOMING) -> Reminder:
    return Reminder(
        reminder_id="r1",
        title="Collect from Rahim",
        due_on=due_on,
        reminder_type=ReminderType.COLLECTION,
        status=status,
    )


def test_past_open_reminder_is_overdue() -> None:
    assert classify(_reminder(date(2024, 5, 1)), datetime(2024, 5, 2, 9, 0)) is ReminderStatus.OVERDUE


def test_reminder_due_today_is_still_upcoming() -> None:
    assert classify(_reminder(date(2024, 5, 2)), datetime(2024, 5, 2, 23, 59)) is ReminderStatus.UPCOMING
    assert classify(_reminder(date(2024, 5, 9)), date(2024, 5, 2)) is ReminderStatus.UPCOMING


def test_completed_reminder_never_becomes_overdue() -> None:
    reminder = _reminder(date(2020, 1, 1), ReminderStatus.COMPLETED)
    assert classify(reminder, date(2024, 1, 1)) is ReminderStatus.COMPLETED


def test_with_current_status_leaves_original_untouched() -> None:
    reminder = _reminder(date(2024, 5, 1))
    derived = with_current_status(reminder, date(2024, 6, 1))

    assert derived.status is ReminderStatus.OVERDUE
    assert reminder.status is ReminderStatus.UPCOMING


def test_pending_reminders_skip_completed() -> None:
    open_one = _reminder(date(2024, 5, 1))
    done = _reminder(date(2024, 5, 1), ReminderStatus.COMPLETED)
    assert pending_reminders([open_one, done]) == [open_one]
