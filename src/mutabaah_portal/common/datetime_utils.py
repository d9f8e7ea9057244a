from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE, MONTH_KEY_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Tanggal tidak valid (YYYY-MM-DD)")


def parse_month_key(value: str) -> date:
    """Parse YYYY-MM into the first day of that month."""
    try:
        return datetime.strptime((value or "").strip(), MONTH_KEY_FORMAT).date()
    except ValueError:
        raise ValidationError("Bulan tidak valid (YYYY-MM)")


def month_key_of(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def day_key_of(d: date) -> str:
    return f"{d.day:02d}"


def to_epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


class Clock(Protocol):
    """Trusted time source.

    Services ask the clock instead of trusting client-supplied timestamps.
    """

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Server clock pinned to the organisation's timezone."""

    def __init__(self, timezone: str = DEFAULT_TIMEZONE):
        self._tz = ZoneInfo(timezone)

    def now(self) -> datetime:
        return datetime.now(self._tz)


def month_bounds(month_key: str) -> tuple[date, date]:
    """First and last calendar day of a YYYY-MM month."""
    start = parse_month_key(month_key)
    return start, start.replace(day=calendar.monthrange(start.year, start.month)[1])


def date_in_month(month_key: str, day_key: str) -> date:
    start = parse_month_key(month_key)
    try:
        return start.replace(day=int(day_key))
    except ValueError:
        raise ValidationError(f"Tanggal {day_key} tidak ada di bulan {month_key}")
