from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from src.punchboard.punchboard.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.punchboard.punchboard.core.enums import AttendanceStatus
from src.punchboard.punchboard.core.exceptions import DuplicatePunch
from src.punchboard.punchboard.database.mysql_base import is_duplicate_key


@pytest.fixture
def cursor():
    return MagicMock()


@pytest.fixture
def connection(cursor):
    conn = MagicMock()
    conn.cursor.return_value = cursor
    return conn


@pytest.fixture
def repo(connection):
    factory = MagicMock()
    factory.connect.return_value = connection
    return MySQLAttendanceRepository(factory)


def test_duplicate_key_on_insert_becomes_duplicate_punch(repo, cursor, connection):
    cursor.execute.side_effect = IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)

    with pytest.raises(DuplicatePunch):
        repo.create_punch_in(
            employee_id="e1",
            day=date(2026, 3, 2),
            punch_in_at=datetime(2026, 3, 2, 9, 0),
            status=AttendanceStatus.PRESENT,
        )

    connection.rollback.assert_called_once()
    connection.commit.assert_not_called()
    connection.close.assert_called_once()


def test_other_integrity_errors_propagate(repo, cursor):
    cursor.execute.side_effect = IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)

    with pytest.raises(IntegrityError):
        repo.create_punch_in(
            employee_id="ghost",
            day=date(2026, 3, 2),
            punch_in_at=datetime(2026, 3, 2, 9, 0),
            status=AttendanceStatus.PRESENT,
        )


def test_insert_returns_new_id(repo, cursor, connection):
    cursor.lastrowid = 41

    new_id = repo.create_punch_in(
        employee_id="e1",
        day=date(2026, 3, 2),
        punch_in_at=datetime(2026, 3, 2, 9, 0),
        status=AttendanceStatus.PRESENT,
    )

    assert new_id == 41
    connection.commit.assert_called_once()


def test_punch_out_update_is_conditional(repo, cursor):
    cursor.rowcount = 0

    updated = repo.update_punch_out(attendance_id=3, punch_out_at=datetime(2026, 3, 2, 17, 0), total_hours=8.0)

    assert updated is False
    sql = cursor.execute.call_args[0][0]
    assert "punch_out_at IS NULL" in sql


def test_rows_are_mapped_to_records(repo, cursor):
    cursor.fetchone.return_value = {
        "attendance_id": 3,
        "employee_id": "e1",
        "day": date(2026, 3, 2),
        "punch_in_at": datetime(2026, 3, 2, 9, 0),
        "punch_out_at": datetime(2026, 3, 2, 17, 30),
        "total_hours": Decimal("8.50"),
        "status": "present",
        "notes": None,
    }

    rec = repo.get_for_employee_and_day("e1", date(2026, 3, 2))

    assert rec.total_hours == 8.5
    assert isinstance(rec.total_hours, float)
    assert rec.status == AttendanceStatus.PRESENT


def test_list_records_builds_filters(repo, cursor):
    cursor.fetchall.return_value = []

    repo.list_records(start_day=date(2026, 3, 1), end_day=date(2026, 3, 2), employee_id="e1")

    sql, params = cursor.execute.call_args[0]
    assert "day >= %s AND day <= %s AND employee_id=%s" in sql
    assert params == (date(2026, 3, 1), date(2026, 3, 2), "e1")


def test_is_duplicate_key():
    assert is_duplicate_key(IntegrityError(msg="dup", errno=errorcode.ER_DUP_ENTRY))
    assert not is_duplicate_key(IntegrityError(msg="fk", errno=errorcode.ER_NO_REFERENCED_ROW_2))
    assert not is_duplicate_key(RuntimeError("boom"))
