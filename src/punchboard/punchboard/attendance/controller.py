from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.validators import optional_iso_date, require_non_empty
from ..core.constants import MSG_INTERNAL_ERROR
from ..core.exceptions import DomainError, InternalError, NotFoundError, ValidationError
from ..container import Container
from .model import state_of

logger = logging.getLogger(__name__)


def status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, InternalError):
        return 500
    # ValidationError, ConflictError (DuplicatePunch) and any other client-side rule.
    return 400


def register(app: Flask, container: Container) -> None:
    def api_errors(view):
        """Translate domain errors into `{message}` JSON bodies."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                status = status_for(e)
                if status >= 500:
                    logger.error("%s failed: %s", request.path, e)
                return jsonify({"message": str(e) if status < 500 else MSG_INTERNAL_ERROR}), status
            except Exception:
                logger.exception("Unhandled error on %s %s", request.method, request.path)
                return jsonify({"message": MSG_INTERNAL_ERROR}), 500

        return wrapper

    @app.route("/api/attendance/punch", methods=["POST"], endpoint="attendance_punch")
    @api_errors
    def punch():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        result = container.attendance_service.punch(data.get("employeeId"))
        return jsonify(result.to_dict()), 200

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @api_errors
    def today():
        summary = container.summary_service.today_summary()
        return jsonify(summary.to_dict()), 200

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @api_errors
    def list_attendance():
        day = optional_iso_date(request.args.get("date"), "date")
        employee_id = (request.args.get("employee") or "").strip() or None

        records = container.attendance_service.list_attendance(day=day, employee_id=employee_id)
        return jsonify([r.to_dict() for r in records]), 200

    @app.route("/api/attendance/employee/<employee_id>", methods=["GET"], endpoint="attendance_employee")
    @api_errors
    def employee_attendance(employee_id: str):
        employee_id = require_non_empty(employee_id, "employeeId")
        start = optional_iso_date(request.args.get("startDate"), "startDate")
        end = optional_iso_date(request.args.get("endDate"), "endDate")

        records = container.attendance_service.employee_history(employee_id, start=start, end=end)
        return jsonify([r.to_dict() for r in records]), 200

    @app.route("/api/attendance/employee/<employee_id>/today", methods=["GET"], endpoint="attendance_employee_today")
    @api_errors
    def employee_today(employee_id: str):
        """Where the employee stands today, so a punch button can show in/out."""

        record = container.attendance_service.today_record(employee_id)
        return jsonify({
            "state": state_of(record).value,
            "attendance": record.to_dict() if record else None,
        }), 200
