from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ActivityCategory, AutomationTrigger


@dataclass(frozen=True)
class ActivityDefinition:
    """Entri katalog aktivitas Mutabaah (tidak berubah saat runtime)."""

    id: str
    category: ActivityCategory
    title: str
    monthly_target: int
    automation_trigger: Optional[AutomationTrigger] = None
    trigger_value: Optional[str] = None
