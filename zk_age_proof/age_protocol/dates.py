"""Calendar helpers: canonical date strings, age arithmetic, epoch conversion."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

from .config import AGE_THRESHOLD_YEARS
from .exceptions import InvalidDateError

DateInput = Union[date, datetime, str]


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` or the local wall clock as an aware datetime."""
    if now is None:
        return datetime.now().astimezone()
    if not isinstance(now, datetime):
        raise TypeError(f"now must be datetime, got {type(now)}")
    return now


def parse_instant(text: str) -> datetime:
    """
    Parse an ISO 8601 timestamp, accepting a trailing ``Z`` for UTC.

    Naive values are taken as local time.

    Raises:
        ValueError: If the text is not an ISO 8601 timestamp
    """
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    moment = datetime.fromisoformat(text)
    return moment if moment.tzinfo is not None else moment.astimezone()


def parse_birth_date(value: DateInput) -> date:
    """
    Coerce a birth date input to a calendar date.

    Accepts ``date``, ``datetime`` (time-of-day and timezone discarded) or an
    ISO 8601 string (``YYYY-MM-DD`` or a full timestamp).

    Raises:
        InvalidDateError: If the value is not a real calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Invalid date: {value!r}")

    text = value.strip()
    if not text:
        raise InvalidDateError("Invalid date: empty value")
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return parse_instant(text).date()
    except ValueError:
        raise InvalidDateError(f"Invalid date: {value!r}") from None


def canonical_date_string(value: DateInput) -> str:
    """Canonical ``YYYY-MM-DD`` form of a date input."""
    return parse_birth_date(value).isoformat()


def calculate_age(birth_date: date, today: date) -> int:
    """
    Whole years between ``birth_date`` and ``today``.

    One year is subtracted while this year's birthday is still ahead. A
    29 February birthday counts as passed from 1 March in non-leap years.
    """
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def is_of_age(
    birth_date: date, today: date, threshold: int = AGE_THRESHOLD_YEARS
) -> bool:
    return calculate_age(birth_date, today) >= threshold


def to_epoch_ms(moment: datetime) -> int:
    """Milliseconds since the Unix epoch (naive values are local time)."""
    return int(round(moment.timestamp() * 1000))


def from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def format_human(moment: datetime) -> str:
    """Human-readable timestamp for response bodies."""
    return moment.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
