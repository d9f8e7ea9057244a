from __future__ import annotations

from typing import Callable, Protocol, Sequence

from .model import DayMap


class LedgerRepository(Protocol):
    def load_month(self, employee_id: str, month_key: str) -> DayMap:
        """Stored day map for the month, empty when nothing was recorded."""

        raise NotImplementedError

    def save_month(self, employee_id: str, month_key: str, day_map: DayMap) -> None:
        raise NotImplementedError

    def list_months(self, employee_id: str) -> Sequence[str]:
        raise NotImplementedError

    def update_month(self, employee_id: str, month_key: str, mutate: Callable[[DayMap], DayMap]) -> DayMap:
        """Read, apply mutate, write back as one unit of work. Returns the stored result."""

        raise NotImplementedError
