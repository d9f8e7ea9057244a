from __future__ import annotations

import logging
from typing import Sequence

from ..common.datetime_utils import Clock, month_key_of, parse_month_key, to_epoch_ms
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import ActivationRecord
from .repository import ActivationRepository

logger = logging.getLogger(__name__)


class ActivationService:
    def __init__(self, repo: ActivationRepository, clock: Clock):
        self._repo = repo
        self._clock = clock

    def activate_month(self, *, employee_id: str, month_key: str) -> bool:
        """Opt an employee into a month. Idempotent; returns True on first activation."""

        employee_id = require_non_empty(employee_id, "Karyawan")
        month_start = parse_month_key(month_key)
        now = self._clock.now()
        if month_start > now.date().replace(day=1):
            raise ValidationError("Tidak dapat mengaktifkan bulan yang akan datang.")

        created = self._repo.add(
            ActivationRecord(
                employee_id=employee_id,
                month_key=month_key_of(month_start),
                activated_at=to_epoch_ms(now),
            )
        )
        if created:
            logger.info("Activated %s for %s", month_key_of(month_start), employee_id)
        return created

    def list_activated_months(self, *, employee_id: str) -> Sequence[str]:
        return sorted(self._repo.list_for_employee(employee_id))
