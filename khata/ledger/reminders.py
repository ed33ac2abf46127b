"""Mini README: Reminder status helpers.

Structure:
    * classify - derive a reminder's status for a given moment.
    * with_current_status - copy of a reminder carrying the derived status.
    * pending_reminders - reminders that still need attention.

Stored statuses are never promoted automatically. Callers that want to show
overdue reminders run ``classify`` against the current time when they read.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List, Union

from .models import Reminder, ReminderStatus


def classify(reminder: Reminder, now: Union[datetime, date]) -> ReminderStatus:
    """Return ``OVERDUE`` for open reminders dated before ``now``."""

    if reminder.status is ReminderStatus.COMPLETED:
        return ReminderStatus.COMPLETED
    today = now.date() if isinstance(now, datetime) else now
    if reminder.due_on < today:
        return ReminderStatus.OVERDUE
    return ReminderStatus.UPCOMING


def with_current_status(reminder: Reminder, now: Union[datetime, date]) -> Reminder:
    return replace(reminder, status=classify(reminder, now))


def pending_reminders(reminders: Iterable[Reminder]) -> List[Reminder]:
    return [reminder for reminder in reminders if reminder.status is not ReminderStatus.COMPLETED]
