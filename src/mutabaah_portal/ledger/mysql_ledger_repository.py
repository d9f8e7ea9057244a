from __future__ import annotations

import time
from typing import Callable, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .merge import clean_month
from .model import DayMap
from .repository import LedgerRepository


class MySQLLedgerRepository(LedgerRepository):
    """One JSON row per (employee, month) in employee_monthly_activities."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_month(self, employee_id: str, month_key: str) -> DayMap:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT day_data FROM employee_monthly_activities WHERE employee_id=%s AND month_key=%s",
                (employee_id, month_key),
            )
            r = fetchone(cur)
        return clean_month(load_json(r["day_data"])) if r else {}

    def save_month(self, employee_id: str, month_key: str, day_map: DayMap) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._upsert(cur, employee_id, month_key, clean_month(day_map))

    def list_months(self, employee_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT month_key FROM employee_monthly_activities WHERE employee_id=%s ORDER BY month_key",
                (employee_id,),
            )
            return [r["month_key"] for r in fetchall(cur)]

    def update_month(self, employee_id: str, month_key: str, mutate: Callable[[DayMap], DayMap]) -> DayMap:
        with db_cursor(self._conn_factory) as (_, cur):
            # Make sure a row exists so FOR UPDATE has something to lock.
            cur.execute(
                """
                INSERT IGNORE INTO employee_monthly_activities(employee_id, month_key, day_data, updated_at)
                VALUES(%s,%s,%s,%s)
                """,
                (employee_id, month_key, dump_json({}), _now_ms()),
            )
            cur.execute(
                """
                SELECT day_data FROM employee_monthly_activities
                WHERE employee_id=%s AND month_key=%s
                FOR UPDATE
                """,
                (employee_id, month_key),
            )
            r = fetchone(cur)
            current = clean_month(load_json(r["day_data"])) if r else {}
            updated = clean_month(mutate(current))
            self._upsert(cur, employee_id, month_key, updated)
            return updated

    @staticmethod
    def _upsert(cur, employee_id: str, month_key: str, day_map: DayMap) -> None:
        cur.execute(
            """
            INSERT INTO employee_monthly_activities(employee_id, month_key, day_data, updated_at)
            VALUES(%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE day_data=VALUES(day_data), updated_at=VALUES(updated_at)
            """,
            (employee_id, month_key, dump_json(day_map), _now_ms()),
        )


def _now_ms() -> int:
    return int(time.time() * 1000)
