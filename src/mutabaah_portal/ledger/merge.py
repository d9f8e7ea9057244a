"""Pure ledger operations.

Every function returns a new mapping and never mutates its arguments, so a
caller can compute a tentative state and simply not persist it to roll back.
Day maps are sparse: only credited flags (True) are kept.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

from ..common.datetime_utils import day_key_of, month_key_of
from ..common.validators import is_day_key, require_day_key, require_non_empty
from .model import DayMap, ProgressFragment


def clean_month(day_map: Mapping[str, object] | None) -> DayMap:
    """Drop foreign (non-date) keys and non-credited flags."""

    cleaned: DayMap = {}
    for day_key, flags in (day_map or {}).items():
        if not is_day_key(day_key) or not isinstance(flags, Mapping):
            continue
        day = {str(activity_id): True for activity_id, value in flags.items() if value is True}
        if day:
            cleaned[day_key] = day
    return cleaned


def mark_activity(day_map: Mapping[str, object] | None, day_key: str, activity_id: str, value: bool = True) -> DayMap:
    require_day_key(day_key)
    activity_id = require_non_empty(activity_id, "Aktivitas")

    cleaned = clean_month(day_map)
    day = dict(cleaned.get(day_key, {}))
    if value:
        day[activity_id] = True
    else:
        day.pop(activity_id, None)

    if day:
        cleaned[day_key] = day
    else:
        cleaned.pop(day_key, None)
    return cleaned


def merge_fragment(day_map: Mapping[str, object] | None, fragment: Mapping[str, object] | None) -> DayMap:
    """Union a fragment into a month at day granularity (set-union on credits)."""

    merged = clean_month(day_map)
    for day_key, flags in clean_month(fragment).items():
        merged[day_key] = {**merged.get(day_key, {}), **flags}
    return merged


def merge_fragments(fragments: Iterable[ProgressFragment]) -> ProgressFragment:
    result: ProgressFragment = {}
    for fragment in fragments:
        for month_key, day_map in fragment.items():
            result[month_key] = merge_fragment(result.get(month_key), day_map)
    return {month_key: days for month_key, days in result.items() if days}


def fragment_for(on: date, activity_id: str) -> ProgressFragment:
    return {month_key_of(on): {day_key_of(on): {activity_id: True}}}


def count_credits(day_map: Mapping[str, object] | None, activity_id: str) -> int:
    return sum(1 for flags in clean_month(day_map).values() if flags.get(activity_id))
