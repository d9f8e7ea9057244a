from __future__ import annotations

from typing import Protocol, Sequence

from .model import ActivationRecord


class ActivationRepository(Protocol):
    def add(self, record: ActivationRecord) -> bool:
        """Insert if absent. Returns False when the month was already activated."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[str]:
        raise NotImplementedError
