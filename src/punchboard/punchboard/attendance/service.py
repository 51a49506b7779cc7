from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import hours_between, now_local, to_whole_seconds
from ..common.store_errors import store_errors
from ..common.validators import require_non_empty
from ..core.constants import (
    MSG_ALREADY_PUNCHED,
    MSG_EMPLOYEE_NOT_FOUND,
    MSG_PUNCHED_IN,
    MSG_PUNCHED_OUT,
    TOTAL_HOURS_PRECISION,
)
from ..core.enums import AttendanceStatus, PunchAction, PunchState
from ..core.exceptions import DuplicatePunch, EmployeeNotFound, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..realtime.notifier import Notifier, PunchEvent
from .model import AttendanceRecord, PunchResult, state_of
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def attach_employees(records: Iterable[AttendanceRecord], employees: EmployeeRepository) -> list[AttendanceRecord]:
    """Fill in each record's employee (name, email, position, department) for display."""

    records = list(records)
    if not records:
        return records
    by_id = {e.employee_id: e for e in employees.get_by_ids({r.employee_id for r in records})}
    return [replace(r, employee=by_id.get(r.employee_id)) for r in records]


class AttendanceService:
    """Punch-in/punch-out state engine plus attendance queries.

    Per employee per local calendar day: NO_RECORD -> PUNCHED_IN -> PUNCHED_OUT.
    A punch on a closed day is rejected with DuplicatePunch. The engine itself
    holds no locks; the repository's conditional writes decide races. Store
    failures surface as InternalError.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        notifier: Optional[Notifier] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._notifier = notifier

    def _require_active_employee(self, employee_id) -> Employee:
        employee_id = require_non_empty(employee_id, "employeeId")
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise EmployeeNotFound(MSG_EMPLOYEE_NOT_FOUND)
        return employee

    def punch(self, employee_id: str, *, now: datetime | None = None) -> PunchResult:
        now = to_whole_seconds(now or now_local())

        with store_errors("punch"):
            employee = self._require_active_employee(employee_id)
            day = now.date()

            record = self._attendance.get_for_employee_and_day(employee.employee_id, day)
            state = state_of(record)

            if state == PunchState.NO_RECORD:
                result = self._punch_in(employee, day=day, now=now)
            elif state == PunchState.PUNCHED_IN:
                result = self._punch_out(replace(record, employee=employee), now=now)
            else:
                logger.info("Rejected punch for %s: day %s already closed", employee.employee_id, day)
                raise DuplicatePunch(MSG_ALREADY_PUNCHED)

        self._notify(result)
        return result

    def _punch_in(self, employee: Employee, *, day: date, now: datetime) -> PunchResult:
        attendance_id = self._attendance.create_punch_in(
            employee_id=employee.employee_id,
            day=day,
            punch_in_at=now,
            status=AttendanceStatus.PRESENT,
        )
        record = AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee.employee_id,
            day=day,
            punch_in_at=now,
            status=AttendanceStatus.PRESENT,
            employee=employee,
        )
        logger.info("Punch-in: employee=%s at %s", employee.employee_id, now.isoformat())
        return PunchResult(record=record, action=PunchAction.PUNCH_IN, message=MSG_PUNCHED_IN)

    def _punch_out(self, record: AttendanceRecord, *, now: datetime) -> PunchResult:
        if now < record.punch_in_at:
            raise ValidationError("Punch-out time is earlier than punch-in time")

        total_hours = hours_between(record.punch_in_at, now, ndigits=TOTAL_HOURS_PRECISION)
        updated = self._attendance.update_punch_out(
            attendance_id=record.attendance_id,
            punch_out_at=now,
            total_hours=total_hours,
        )
        if not updated:
            # Another request closed the day between our read and write.
            raise DuplicatePunch(MSG_ALREADY_PUNCHED)

        record = replace(record, punch_out_at=now, total_hours=total_hours)
        logger.info("Punch-out: employee=%s at %s (%.2fh)", record.employee_id, now.isoformat(), total_hours)
        return PunchResult(record=record, action=PunchAction.PUNCH_OUT, message=MSG_PUNCHED_OUT)

    def _notify(self, result: PunchResult) -> None:
        if not self._notifier:
            return
        event = PunchEvent(
            type=result.action,
            employee_id=result.record.employee_id,
            timestamp=result.record.punch_out_at or result.record.punch_in_at,
        )
        try:
            self._notifier.broadcast(event)
        except Exception:
            logger.exception("Broadcast of %s failed; punch already committed", event.type.value)

    def today_record(self, employee_id: str, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        employee_id = require_non_empty(employee_id, "employeeId")
        now = now or now_local()
        with store_errors("today record"):
            record = self._attendance.get_for_employee_and_day(employee_id, now.date())
            if record is None:
                return None
            return attach_employees([record], self._employees)[0]

    def list_attendance(self, *, day: date | None = None, employee_id: str | None = None) -> Sequence[AttendanceRecord]:
        with store_errors("list attendance"):
            records = self._attendance.list_records(start_day=day, end_day=day, employee_id=employee_id)
            return attach_employees(records, self._employees)

    def employee_history(
        self,
        employee_id: str,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> Sequence[AttendanceRecord]:
        employee_id = require_non_empty(employee_id, "employeeId")
        # A range only applies when both ends are given.
        if start is None or end is None:
            start = end = None
        with store_errors("employee history"):
            records = self._attendance.list_records(start_day=start, end_day=end, employee_id=employee_id)
            return attach_employees(records, self._employees)
