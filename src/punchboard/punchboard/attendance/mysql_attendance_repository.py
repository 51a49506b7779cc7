from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import MSG_ALREADY_PUNCHED
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicatePunch
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "attendance_id, employee_id, day, punch_in_at, punch_out_at, total_hours, status, notes"


def _to_record(r: dict) -> AttendanceRecord:
    total_hours = r.get("total_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=str(r["employee_id"]),
        day=r["day"],
        punch_in_at=r["punch_in_at"],
        punch_out_at=r.get("punch_out_at"),
        total_hours=float(total_hours) if total_hours is not None else None,
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_day(self, employee_id: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND day=%s
                """,
                (employee_id, day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_punch_in(
        self,
        *,
        employee_id: str,
        day: date,
        punch_in_at: datetime,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, day, punch_in_at, status, notes)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (employee_id, day, punch_in_at, status.value, notes),
                )
                return int(cur.lastrowid)
        except Exception as exc:
            if is_duplicate_key(exc):
                logger.info("Concurrent punch-in rejected by uq_attendance_employee_day (employee=%s day=%s)", employee_id, day)
                raise DuplicatePunch(MSG_ALREADY_PUNCHED) from exc
            raise

    def update_punch_out(
        self,
        *,
        attendance_id: int,
        punch_out_at: datetime,
        total_hours: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_out_at=%s, total_hours=%s
                WHERE attendance_id=%s AND punch_out_at IS NULL
                """,
                (punch_out_at, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        start_day: Optional[date] = None,
        end_day: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if start_day is not None:
            clauses.append("day >= %s")
            params.append(start_day)
        if end_day is not None:
            clauses.append("day <= %s")
            params.append(end_day)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY day DESC, punch_in_at DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_day(self, day: date) -> Sequence[AttendanceRecord]:
        return self.list_records(start_day=day, end_day=day)
