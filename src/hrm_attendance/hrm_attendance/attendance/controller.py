from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import coerce_date
from ..core.constants import DEFAULT_PUNCH_IN, DEFAULT_PUNCH_OUT
from ..core.exceptions import PersistenceError, PolicyViolationError, ValidationError
from ..container import Container

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def json_errors(view):
        """Translate domain errors into ``{"success": false, "message": ...}`` responses."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except PolicyViolationError as e:
                return jsonify({"success": False, "message": str(e)}), 422
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except PersistenceError as e:
                return jsonify({"success": False, "message": e.message, "code": e.code}), 502

        return wrapper

    def _open_view(date_value=None):
        view = container.new_attendance_view()
        view.load(date_value)
        return view

    def _open_view_for_write(date_value):
        # Writes never fall back to today.
        day = coerce_date(date_value)
        if day is None:
            raise ValidationError("A valid date (YYYY-MM-DD) is required")
        return _open_view(day)

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("JSON body is required")
        return data

    def _state(view) -> dict:
        return {
            "date": view.selected_date.strftime("%Y-%m-%d"),
            "summary": view.summary().to_dict(),
        }

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    @json_errors
    def api_attendance():
        view = _open_view(request.args.get("date"))
        rows = view.rows(
            department=request.args.get("department"),
            status=request.args.get("status"),
            search=request.args.get("search"),
        )
        return jsonify(
            {
                "success": True,
                **_state(view),
                "departments": view.departments(),
                "policy": view.policy.to_dict(),
                "rows": [r.to_dict() for r in rows],
            }
        )

    @app.route("/api/attendance/calendar", methods=["GET"], endpoint="api_attendance_calendar")
    @json_errors
    def api_attendance_calendar():
        view = _open_view(request.args.get("date"))
        try:
            year = int(request.args["year"]) if request.args.get("year") else None
            month = int(request.args["month"]) if request.args.get("month") else None
        except ValueError:
            raise ValidationError("Invalid year or month")
        return jsonify({"success": True, "calendar": view.calendar(year, month).to_dict()})

    @app.route("/api/attendance/members", methods=["GET"], endpoint="api_attendance_members")
    @json_errors
    def api_attendance_members():
        view = _open_view(request.args.get("date"))
        return jsonify(
            {
                "success": True,
                "date": view.selected_date.strftime("%Y-%m-%d"),
                "members": [o.to_dict() for o in view.member_options()],
                "defaults": {"punchIn": DEFAULT_PUNCH_IN, "punchOut": DEFAULT_PUNCH_OUT},
            }
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_add")
    @json_errors
    def api_attendance_add():
        data = _body()
        view = _open_view_for_write(data.get("date"))
        record = view.add_single(
            str(data.get("memberId") or ""),
            data.get("punchIn"),
            data.get("punchOut"),
            comments=str(data.get("comments") or ""),
            status_override=data.get("statusOverride"),
        )
        log.info("Attendance added for %s on %s", record.member_id, record.work_date)
        return jsonify({"success": True, "message": "Attendance saved successfully!", **_state(view)}), 201

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="api_attendance_bulk")
    @json_errors
    def api_attendance_bulk():
        data = _body()
        view = _open_view_for_write(data.get("date"))
        member_ids = data.get("memberIds") or []
        if not isinstance(member_ids, list):
            raise ValidationError("memberIds must be a list")
        batch = view.add_bulk(member_ids, data.get("punchIn"), data.get("punchOut"))
        return (
            jsonify(
                {
                    "success": True,
                    "message": f"{len(batch)} attendance records saved successfully!",
                    **_state(view),
                }
            ),
            201,
        )

    @app.route("/api/attendance/<member_id>", methods=["PUT"], endpoint="api_attendance_edit")
    @json_errors
    def api_attendance_edit(member_id: str):
        data = _body()
        view = _open_view_for_write(data.get("date"))
        view.edit(
            member_id,
            data.get("punchIn"),
            data.get("punchOut"),
            comments=str(data.get("comments") or ""),
            status_override=data.get("statusOverride"),
        )
        return jsonify({"success": True, "message": "Attendance updated successfully!", **_state(view)})

    @app.route("/api/attendance/<member_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    @json_errors
    def api_attendance_delete(member_id: str):
        view = _open_view_for_write(request.args.get("date"))
        view.delete(member_id)
        return jsonify({"success": True, "message": "Attendance record deleted", **_state(view)})
