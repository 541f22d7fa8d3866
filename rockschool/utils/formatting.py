# rockschool/utils/formatting.py
"""Display helpers shared by feeds and detail views."""
from datetime import date, datetime, timezone
from typing import Optional, Sequence


def format_mentions(names: Sequence[str]) -> str:
    """["A", "B", "C"] -> "A, B and C"; zero or one name is returned as is."""
    names = list(names)
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " and " + names[-1]


_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def time_ago(value: datetime, now: Optional[datetime] = None) -> str:
    now = _as_utc(now or datetime.now(timezone.utc))
    seconds = int((now - _as_utc(value)).total_seconds())
    if seconds < 60:
        return "just now"
    for unit, size in _UNITS:
        amount = seconds // size
        if amount >= 1:
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"
    return "just now"


def student_age(dob: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    had_birthday = (today.month, today.day) >= (dob.month, dob.day)
    return today.year - dob.year - (0 if had_birthday else 1)
