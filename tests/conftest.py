from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.punchboard.punchboard.attendance.model import AttendanceRecord
from src.punchboard.punchboard.attendance.service import AttendanceService
from src.punchboard.punchboard.container import build_services
from src.punchboard.punchboard.core.constants import MSG_ALREADY_PUNCHED
from src.punchboard.punchboard.core.enums import AttendanceStatus
from src.punchboard.punchboard.core.exceptions import DuplicatePunch
from src.punchboard.punchboard.employees.model import Employee
from src.punchboard.punchboard.realtime.notifier import RealtimeNotifier


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_ids(self, employee_ids):
        return [self._by_id[i] for i in employee_ids if i in self._by_id]

    def list_active(self):
        return [e for e in self._by_id.values() if e.is_active]


class InMemoryAttendance:
    """Dict keyed by (employee_id, day); the lock plays the UNIQUE key."""

    def __init__(self):
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._lock = threading.Lock()
        self._id = 0

    def get_for_employee_and_day(self, employee_id: str, day: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, day))

    def create_punch_in(self, *, employee_id: str, day: date, punch_in_at: datetime, status: AttendanceStatus, notes=None) -> int:
        with self._lock:
            if (employee_id, day) in self._by_key:
                raise DuplicatePunch(MSG_ALREADY_PUNCHED)
            self._id += 1
            self._by_key[(employee_id, day)] = AttendanceRecord(
                attendance_id=self._id,
                employee_id=employee_id,
                day=day,
                punch_in_at=punch_in_at,
                status=status,
                notes=notes,
            )
            return self._id

    def update_punch_out(self, *, attendance_id: int, punch_out_at: datetime, total_hours: float) -> bool:
        with self._lock:
            for key, rec in self._by_key.items():
                if rec.attendance_id == attendance_id and rec.punch_out_at is None:
                    self._by_key[key] = replace(rec, punch_out_at=punch_out_at, total_hours=total_hours)
                    return True
            return False

    def list_records(self, *, start_day=None, end_day=None, employee_id=None):
        items = [
            r
            for r in self._by_key.values()
            if (start_day is None or r.day >= start_day)
            and (end_day is None or r.day <= end_day)
            and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: (r.day, r.punch_in_at), reverse=True)
        return items

    def list_for_day(self, day: date):
        return self.list_records(start_day=day, end_day=day)

    def all(self):
        return list(self._by_key.values())


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def broadcast(self, event) -> int:
        self.events.append(event)
        return 1


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id="e1", name="Asha Verma", email="asha@example.com", position="Stylist", department="Hair"),
            Employee(employee_id="e2", name="Rohan Mehta", email="rohan@example.com", position="Therapist", department="Spa"),
            Employee(employee_id="e3", name="Meera Iyer", email="meera@example.com", position="Receptionist", department="Front Desk"),
            Employee(employee_id="gone", name="Kabir Singh", email="kabir@example.com", is_active=False),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(attendance_repo, employees_repo, notifier) -> AttendanceService:
    return AttendanceService(attendance_repo, employees_repo, notifier=notifier)


@pytest.fixture
def container(attendance_repo, employees_repo):
    return build_services(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        notifier=RealtimeNotifier(),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.punchboard.punchboard.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
