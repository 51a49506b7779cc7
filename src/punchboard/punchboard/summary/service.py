from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.service import attach_employees
from ..common.datetime_utils import now_local
from ..common.store_errors import store_errors
from ..employees.repository import EmployeeRepository


@dataclass(frozen=True)
class AttendanceSummary:
    total_employees: int
    present: int
    absent: int
    punched_out: int
    still_working: int
    attendance: Sequence[AttendanceRecord]

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "present": self.present,
            "absent": self.absent,
            "punchedOut": self.punched_out,
            "stillWorking": self.still_working,
            "attendance": [r.to_dict() for r in self.attendance],
        }


def summarize(total_employees: int, records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    """Fold today's records into dashboard counts."""

    records = list(records)
    present = sum(1 for r in records if r.punch_in_at is not None)
    punched_out = sum(1 for r in records if r.punch_out_at is not None)
    still_working = sum(1 for r in records if r.punch_in_at is not None and r.punch_out_at is None)

    return AttendanceSummary(
        total_employees=total_employees,
        present=present,
        absent=total_employees - present,
        punched_out=punched_out,
        still_working=still_working,
        attendance=records,
    )


class SummaryService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def today_summary(self, *, now: datetime | None = None) -> AttendanceSummary:
        now = now or now_local()
        with store_errors("today summary"):
            employees = self._employees.list_active()
            records = attach_employees(self._attendance.list_for_day(now.date()), self._employees)
        return summarize(len(employees), records)
