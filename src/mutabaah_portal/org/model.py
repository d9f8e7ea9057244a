from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class OrgProfile:
    """Who an employee is in the review hierarchy."""

    employee_id: str
    name: str
    role: Role = Role.EMPLOYEE
    mentor_id: Optional[str] = None
    ka_unit_id: Optional[str] = None
    hospital_id: Optional[str] = None
    managed_hospital_ids: FrozenSet[str] = field(default_factory=frozenset)
    # super-admin, or the BPH functional role
    global_override: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role in {Role.ADMIN, Role.SUPER_ADMIN}

    def manages_hospital(self, hospital_id: Optional[str]) -> bool:
        return self.is_admin and bool(hospital_id) and hospital_id in self.managed_hospital_ids
