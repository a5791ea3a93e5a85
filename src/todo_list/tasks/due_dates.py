# src/todo_list/tasks/due_dates.py

from __future__ import annotations

from datetime import date, datetime, time, timedelta

END_OF_DAY = time(23, 59, 59, 999000)

_DAY_OFFSETS = {
    "today": 0,
    "tomorrow": 1,
}


def end_of_day(day: date) -> datetime:
    """23:59:59.999 local time on `day`."""
    return datetime.combine(day, END_OF_DAY).astimezone()


def parse_due_date(raw: str | None, *, now: datetime | None = None) -> datetime | None:
    """
    Resolve a symbolic due date.

    "today" / "tomorrow" (any case) -> end of that day, local time.
    Anything else (including None) -> None; unknown input is not an error.
    """
    if raw is None:
        return None

    offset = _DAY_OFFSETS.get(raw.strip().lower())
    if offset is None:
        return None

    if now is None:
        now = datetime.now()
    today = now.astimezone().date() if now.tzinfo is not None else now.date()
    return end_of_day(today + timedelta(days=offset))
