from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .realtime.notifier import RealtimeNotifier
from .summary.service import SummaryService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    notifier: RealtimeNotifier
    attendance_service: AttendanceService
    summary_service: SummaryService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    notifier: RealtimeNotifier | None = None,
    conn: DatabaseConnection | None = None,
) -> Container:
    notifier = notifier or RealtimeNotifier()
    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        notifier=notifier,
        attendance_service=AttendanceService(attendance_repo, employees_repo, notifier=notifier),
        summary_service=SummaryService(attendance_repo, employees_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, notifier: RealtimeNotifier | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        notifier=notifier,
        conn=conn,
    )
