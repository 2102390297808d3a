from __future__ import annotations

from datetime import datetime, time
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import isoformat_or_none, parse_iso_date
from ..common.responses import error_response, json_error
from ..core.enums import Role
from ..container import Container

# A sweep requested for a past day runs as if at the scheduled minute of that day.
_MANUAL_SWEEP_TIME = time(23, 59)


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Please log in to continue.", 401)
            if session.get("role") != Role.ADMIN.value:
                return json_error("Admin access required.", 403)
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/attendance/status/<student_id>", methods=["GET"], endpoint="attendance_status")
    def attendance_status(student_id: str):
        try:
            view = container.attendance_service.get_status(student_id)
        except Exception as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "status": view.status.value,
                "lastActionTime": isoformat_or_none(view.last_action_time),
                "recordStatus": view.record_status.value if view.record_status else None,
            }
        )

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="attendance_toggle")
    def attendance_toggle():
        data = request.get_json(silent=True) or {}
        try:
            result = container.attendance_service.toggle(data.get("studentId"))
        except Exception as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "newStatus": result.new_status.value,
                "lastActionTime": result.last_action_time.isoformat(),
            }
        )

    @app.route("/api/attendance/sweep", methods=["POST"], endpoint="attendance_sweep")
    @admin_required
    def attendance_sweep():
        data = request.get_json(silent=True) or {}
        try:
            if data.get("date"):
                as_of = datetime.combine(parse_iso_date(data["date"]), _MANUAL_SWEEP_TIME)
            else:
                as_of = container.clock.now()
            report = container.absence_sweeper.run_nightly_sweep(as_of)
        except Exception as e:
            return error_response(e)

        return jsonify({"success": True, "report": report.to_dict()})
