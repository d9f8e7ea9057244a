from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..catalog.model import ActivityDefinition
from ..catalog.registry import activities_for_trigger
from ..core.enums import AutomationTrigger
from .base import SourceAdapter
from .model import ReadingReport


class ReadingHistoryAdapter(SourceAdapter[ReadingReport]):
    """Any Quran or book reading report credits the reading activity for that day."""

    def __init__(self, catalog: Optional[Sequence[ActivityDefinition]] = None):
        matches = activities_for_trigger(AutomationTrigger.BOOK_READING_REPORT, catalog)
        self._activity_id = matches[0].id if matches else None

    def credit_for(self, record: ReadingReport) -> Optional[tuple[date, str]]:
        if self._activity_id is None:
            return None
        return record.date, self._activity_id
