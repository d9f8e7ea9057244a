from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OrgProfile
from .repository import OrgDirectory

BPH_FUNCTIONAL_ROLE = "BPH"


class MySQLOrgDirectory(OrgDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_profile(self, employee_id: str) -> Optional[OrgProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, role, functional_role,
                       mentor_id, ka_unit_id, hospital_id
                FROM employees
                WHERE employee_id=%s
                """,
                (str(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            cur.execute(
                "SELECT hospital_id FROM admin_hospitals WHERE employee_id=%s",
                (str(employee_id),),
            )
            managed = frozenset(str(row["hospital_id"]) for row in fetchall(cur))

        role = Role(r["role"]) if r.get("role") else Role.EMPLOYEE
        functional_role = (r.get("functional_role") or "").strip().upper()
        return OrgProfile(
            employee_id=str(r["employee_id"]),
            name=r["name"],
            role=role,
            mentor_id=r.get("mentor_id"),
            ka_unit_id=r.get("ka_unit_id"),
            hospital_id=r.get("hospital_id"),
            managed_hospital_ids=managed,
            global_override=role == Role.SUPER_ADMIN or functional_role == BPH_FUNCTIONAL_ROLE,
        )
