# src/taskdesk/helpers/dates.py

"""
Date helpers for due dates and timestamps coming from the API.

Values are ISO-8601 strings ("2024-03-05", "2024-03-05T14:00:00.000Z").
Naive values are read as local time; aware values are shown in local time.
Patterns are strftime patterns.
"""

from __future__ import annotations

from datetime import datetime, timedelta

NOT_SET = "Não definida"
INVALID_DATE = "Data inválida"

DATE_PATTERN = "%d/%m/%Y"
DATETIME_PATTERN = "%d/%m/%Y %H:%M"
INPUT_PATTERN = "%Y-%m-%d"


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or datetime; None when empty or unparsable."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def _local(dt: datetime) -> datetime:
    return dt.astimezone() if dt.tzinfo is not None else dt


def _aware(dt: datetime) -> datetime:
    # astimezone() on a naive datetime assumes local time.
    return dt.astimezone()


def _now() -> datetime:
    return datetime.now().astimezone()


def format_date(value: str | None, pattern: str = DATE_PATTERN) -> str:
    if not value:
        return NOT_SET
    dt = parse_iso(value)
    if dt is None:
        return INVALID_DATE
    return _local(dt).strftime(pattern)


def format_datetime(value: str | None, pattern: str = DATETIME_PATTERN) -> str:
    return format_date(value, pattern)


def format_date_for_input(value: str | None) -> str:
    dt = parse_iso(value)
    if dt is None:
        return ""
    return _local(dt).strftime(INPUT_PATTERN)


def is_past(value: str | None, now: datetime | None = None) -> bool:
    """Strictly before `now`. Unparsable values are never past."""
    dt = parse_iso(value)
    if dt is None:
        return False
    now = _aware(now) if now is not None else _now()
    return _aware(dt) < now


def is_overdue(value: str | None, now: datetime | None = None) -> bool:
    """Before now and not today: a task due today is not overdue yet."""
    dt = parse_iso(value)
    if dt is None:
        return False
    now = _aware(now) if now is not None else _now()
    local = _aware(dt)
    return local < now and local.date() != now.date()


def is_due_soon(value: str | None, days_threshold: int = 3, now: datetime | None = None) -> bool:
    dt = parse_iso(value)
    if dt is None:
        return False
    now = _aware(now) if now is not None else _now()
    local = _aware(dt)
    return now <= local < now + timedelta(days=days_threshold)


def compare_dates(a: str | None, b: str | None) -> int:
    """
    Comparator for sorting by date (use with functools.cmp_to_key).

    Returns the difference in milliseconds; 0 when either side is invalid,
    so invalid dates keep their relative order under a stable sort.
    """
    da = parse_iso(a)
    db = parse_iso(b)
    if da is None or db is None:
        return 0
    return int((_aware(da) - _aware(db)).total_seconds() * 1000)
