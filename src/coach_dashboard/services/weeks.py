"""Calendar helpers for day-bucketed food entries."""

from datetime import date, timedelta
from uuid import UUID

from coach_dashboard.errors import ValidationError

WEEK_LENGTH = 7
DAY_KEY_LENGTH = 8


def day_key(day: date) -> str:
    """Return the YYYYMMDD bucket key for a calendar day."""
    return f"{day.year:04d}{day.month:02d}{day.day:02d}"


def parse_day_key(value: str) -> date:
    """Parse a YYYYMMDD bucket key back into a date."""
    if len(value) != DAY_KEY_LENGTH or not (value.isascii() and value.isdigit()):
        raise ValidationError(f"Invalid day key: {value!r}")
    try:
        return date(int(value[:4]), int(value[4:6]), int(value[6:]))
    except ValueError as exc:
        raise ValidationError(f"Invalid day key: {value!r}") from exc


def week_range(pivot: date) -> list[date]:
    """Return the Monday-first week containing the pivot date.

    Raises ValidationError when the week runs past the supported calendar.
    """
    start = pivot - timedelta(days=pivot.weekday())
    try:
        return [start + timedelta(days=offset) for offset in range(WEEK_LENGTH)]
    except OverflowError as exc:
        raise ValidationError(f"Week of {pivot.isoformat()} is out of range") from exc


def shift_week(pivot: date, weeks: int) -> date:
    """Move a pivot date by whole weeks (negative for earlier weeks)."""
    try:
        return pivot + timedelta(weeks=weeks)
    except OverflowError as exc:
        raise ValidationError(f"{pivot.isoformat()} cannot move {weeks} weeks") from exc


def entry_path(client_id: UUID, key: str, entry_id: UUID | None = None) -> str:
    """Return the document path of a day bucket or a single entry in it."""
    path = f"users/{client_id}/foods/{key}/entries"
    if entry_id is None:
        return path
    return f"{path}/{entry_id}"
