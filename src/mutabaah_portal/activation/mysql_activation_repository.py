from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ActivationRecord
from .repository import ActivationRepository


class MySQLActivationRepository(ActivationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, record: ActivationRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO activated_months(employee_id, month_key, activated_at)
                VALUES(%s,%s,%s)
                """,
                (record.employee_id, record.month_key, int(record.activated_at)),
            )
            return cur.rowcount == 1

    def list_for_employee(self, employee_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT month_key FROM activated_months WHERE employee_id=%s ORDER BY month_key",
                (employee_id,),
            )
            return [r["month_key"] for r in fetchall(cur)]
