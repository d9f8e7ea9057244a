from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..catalog.model import ActivityDefinition
from ..catalog.registry import list_activities
from ..core.constants import PRAYER_IDS
from ..core.enums import AutomationTrigger
from ..ledger.merge import clean_month
from ..ledger.service import ProgressService


class SummaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for monthly achievement)."""

    @abstractmethod
    def credited_days(self, day_map: Mapping[str, Mapping[str, bool]], activity: ActivityDefinition) -> int:
        raise NotImplementedError


class StandardSummaryCalculator(SummaryCalculator):
    """A day counts once per activity; any of the five prayers counts for the prayer activity."""

    def credited_days(self, day_map: Mapping[str, Mapping[str, bool]], activity: ActivityDefinition) -> int:
        accepted = {activity.id}
        if activity.automation_trigger == AutomationTrigger.PRAYER_WAJIB:
            accepted.update(PRAYER_IDS)
        return sum(1 for flags in day_map.values() if accepted.intersection(k for k, v in flags.items() if v))


@dataclass(frozen=True)
class ActivityProgress:
    activity_id: str
    title: str
    category: str
    credited_days: int
    monthly_target: int
    percent: int
    met: bool

    def to_dict(self) -> dict:
        return {
            "activity_id": self.activity_id,
            "title": self.title,
            "category": self.category,
            "credited_days": self.credited_days,
            "monthly_target": self.monthly_target,
            "percent": self.percent,
            "met": self.met,
        }


def _percent(credited: int, target: int) -> int:
    if target <= 0:
        return 100
    return min(100, int(round(credited * 100 / target)))


class ProgressSummaryService:
    def __init__(self, progress: Optional[ProgressService] = None, calculator: Optional[SummaryCalculator] = None):
        self._progress = progress
        self._calculator = calculator or StandardSummaryCalculator()

    def summarize(
        self,
        day_map: Mapping[str, object],
        catalog: Optional[Sequence[ActivityDefinition]] = None,
    ) -> dict:
        cleaned = clean_month(day_map)
        rows: list[ActivityProgress] = []
        for activity in catalog if catalog is not None else list_activities():
            credited = self._calculator.credited_days(cleaned, activity)
            rows.append(
                ActivityProgress(
                    activity_id=activity.id,
                    title=activity.title,
                    category=activity.category.value,
                    credited_days=credited,
                    monthly_target=activity.monthly_target,
                    percent=_percent(credited, activity.monthly_target),
                    met=credited >= activity.monthly_target,
                )
            )

        overall = int(round(sum(r.percent for r in rows) / len(rows))) if rows else 0
        return {
            "activities": [r.to_dict() for r in rows],
            "overall_percent": overall,
            "met_count": sum(1 for r in rows if r.met),
        }

    def summarize_month(self, *, employee_id: str, month_key: str) -> dict:
        if self._progress is None:
            raise RuntimeError("ProgressSummaryService was built without a ProgressService")
        summary = self.summarize(self._progress.get_month(employee_id=employee_id, month_key=month_key))
        summary["month_key"] = month_key
        return summary
