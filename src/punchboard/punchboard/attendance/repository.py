from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_day(self, employee_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_punch_in(
        self,
        *,
        employee_id: str,
        day: date,
        punch_in_at: datetime,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        """Insert the day's record and return its id.

        Must be atomic on (employee_id, day): raises DuplicatePunch when a record
        for that pair already exists, including one committed concurrently.
        """

        raise NotImplementedError

    def update_punch_out(
        self,
        *,
        attendance_id: int,
        punch_out_at: datetime,
        total_hours: float,
    ) -> bool:
        """Set punch-out only if still unset. Returns False when nothing was updated."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        start_day: Optional[date] = None,
        end_day: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records newest first (day desc, punch-in desc); bounds are inclusive."""

        raise NotImplementedError

    def list_for_day(self, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
