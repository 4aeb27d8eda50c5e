from __future__ import annotations

import csv
import io
from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..core.exceptions import PersistenceError, ValidationError
from ..container import Container

REPORT_FIELDS = [
    "work_date",
    "member_id",
    "member_name",
    "department",
    "punch_in",
    "punch_out",
    "status",
    "worked_hours",
    "comments",
]


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}")

    def _range() -> tuple[date, date]:
        today = today_local()
        start_s = request.args.get("start") or (today - timedelta(days=6)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
        return _parse_date(start_s), _parse_date(end_s)

    def _write_report_csv(*, data, filename: str):
        """Write report rows to CSV response."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/timesheet/report", methods=["GET"], endpoint="api_timesheet_report")
    def api_timesheet_report():
        try:
            start, end = _range()
            data = container.timesheet_report_service.build_report(
                start=start, end=end, member_id=request.args.get("member_id") or None
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "message": e.message, "code": e.code}), 502

        return jsonify({"success": True, "rows": data.rows, "summary": data.summary})

    @app.route("/api/timesheet/export.csv", methods=["GET"], endpoint="api_timesheet_export")
    def api_timesheet_export():
        try:
            start, end = _range()
            data = container.timesheet_report_service.build_report(
                start=start, end=end, member_id=request.args.get("member_id") or None
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "message": e.message, "code": e.code}), 502

        filename = f"attendance_{start:%Y%m%d}_{end:%Y%m%d}.csv"
        return _write_report_csv(data=data, filename=filename)
