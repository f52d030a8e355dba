from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from ..core.constants import MIN_WORK_YEAR
from ..core.exceptions import ValidationError


def _in_store_range(day: date) -> date:
    if day.year < MIN_WORK_YEAR:
        raise ValidationError("Please enter a valid date")
    return day


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz: ZoneInfo) -> datetime:
    """Current time in the server reference timezone.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(tz)


def to_calendar_day(value: str | date | datetime, tz: ZoneInfo) -> date:
    """Normalize an incoming date value to its calendar day in ``tz``.

    Accepts ``YYYY-MM-DD`` or an ISO-8601 date-time. Offset-aware values are
    converted to ``tz`` first; naive values are taken as already local.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return _in_store_range(value)
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Date is required")
        text = value.strip()
        try:
            day = parse_iso_date(text)
        except ValueError:
            pass
        else:
            return _in_store_range(day)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError("Please enter a valid date")

    if moment.tzinfo is not None:
        try:
            moment = moment.astimezone(tz)
        except OverflowError:
            raise ValidationError("Please enter a valid date")
    return _in_store_range(moment.date())
