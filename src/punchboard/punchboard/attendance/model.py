from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus, PunchAction, PunchState
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per employee per day."""

    attendance_id: int
    employee_id: str
    day: date
    punch_in_at: datetime
    punch_out_at: Optional[datetime] = None
    total_hours: Optional[float] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    notes: Optional[str] = None
    # Read-side join; not part of the stored row.
    employee: Optional[Employee] = field(default=None, compare=False)

    @property
    def state(self) -> PunchState:
        if self.punch_out_at is None:
            return PunchState.PUNCHED_IN
        return PunchState.PUNCHED_OUT

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employeeId": self.employee_id,
            "day": self.day.isoformat(),
            "punchInAt": isoformat_or_none(self.punch_in_at),
            "punchOutAt": isoformat_or_none(self.punch_out_at),
            "totalHours": self.total_hours,
            "status": self.status.value,
            "notes": self.notes,
            "employee": self.employee.to_dict() if self.employee else None,
        }


def state_of(record: Optional[AttendanceRecord]) -> PunchState:
    return record.state if record is not None else PunchState.NO_RECORD


@dataclass(frozen=True)
class PunchResult:
    """Outcome of a successful punch."""

    record: AttendanceRecord
    action: PunchAction
    message: str

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "attendance": self.record.to_dict(),
            "action": self.action.value,
        }
