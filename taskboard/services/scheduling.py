"""
Date bucketing: which section a due date belongs to, relative to a given day.

All functions take ``today`` explicitly. It is the caller's local calendar
date and is never derived from the server clock, so a server in another
timezone cannot misplace tasks near midnight.

Week layout relative to ``today``::

    today            <= today (overdue included)
    this-week        (today, next Saturday]
    next-week        (next Saturday, next Sunday + 6]
    after-next-week  beyond that
    longer-term      no due date

"Next" weekday is always strictly after ``today``: on a Saturday the next
Saturday is seven days out.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from taskboard_shared.schemas.common import Section

# date.weekday(): Monday == 0 ... Sunday == 6
SATURDAY = 5
SUNDAY = 6


def next_weekday(today: date, weekday: int) -> date:
    """First date strictly after ``today`` falling on ``weekday``."""
    days = (weekday - today.weekday()) % 7
    return today + timedelta(days=days or 7)


def week_boundaries(today: date) -> tuple[date, date, date]:
    """Return (next Saturday, next Sunday, Saturday after next Sunday)."""
    next_saturday = next_weekday(today, SATURDAY)
    next_sunday = next_weekday(today, SUNDAY)
    return next_saturday, next_sunday, next_sunday + timedelta(days=6)


def date_section(due_date: Optional[date], today: date) -> Section:
    """Bucket a due date into one of the five date sections."""
    if due_date is None:
        return Section.LONGER_TERM
    if due_date <= today:
        return Section.TODAY

    next_saturday, _, saturday_after_next_sunday = week_boundaries(today)
    if due_date <= next_saturday:
        return Section.THIS_WEEK
    if due_date <= saturday_after_next_sunday:
        return Section.NEXT_WEEK
    return Section.AFTER_NEXT_WEEK


def date_in_section(due_date: date, section: Section, today: date) -> bool:
    """True when ``due_date`` buckets into ``section``. Never true for longer-term or non-date sections."""
    if section not in (
        Section.TODAY,
        Section.THIS_WEEK,
        Section.NEXT_WEEK,
        Section.AFTER_NEXT_WEEK,
    ):
        return False
    return date_section(due_date, today) == section


def default_due_date(section: Section, today: date) -> Optional[date]:
    """Due date given to a task dropped into ``section`` with no date to inherit.

    - today: today
    - this-week: tomorrow
    - next-week: the next Sunday
    - after-next-week: the Sunday after that
    - anything else: no due date
    """
    if section == Section.TODAY:
        return today
    if section == Section.THIS_WEEK:
        return today + timedelta(days=1)
    if section == Section.NEXT_WEEK:
        return next_weekday(today, SUNDAY)
    if section == Section.AFTER_NEXT_WEEK:
        return next_weekday(today, SUNDAY) + timedelta(days=7)
    return None


def days_overdue(due_date: Optional[date], today: date) -> int:
    if due_date is None:
        return 0
    return max(0, (today - due_date).days)
