from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ActivationRecord:
    employee_id: str
    month_key: str
    activated_at: int
