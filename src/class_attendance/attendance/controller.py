from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import current_role, current_user_id, json_error, login_required, parse_date_arg
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import AttendanceRow

EXPORT_FIELDS = ["Name", "Date", "Time In", "Time Out", "Scanner In", "Scanner Out", "Status"]


def _row_json(r: AttendanceRow) -> dict:
    return {
        "log_id": r.log_id,
        "user_id": r.user_id,
        "user_name": r.user_name,
        "date": r.log_date.strftime("%Y-%m-%d"),
        "time_in": r.time_in,
        "time_out": r.time_out,
        "scanner_in": r.scanner_in or "N/A",
        "scanner_out": r.scanner_out or "N/A",
        "status": r.status.value,
        "excused": r.excused,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _rows(class_id: str):
        return service.get_rows(
            class_id,
            viewer_id=current_user_id(),
            viewer_role=current_role(),
            on_date=parse_date_arg(request.args.get("date")),
            name_query=request.args.get("name", ""),
        )

    @app.route("/api/classes/<class_id>/attendance", methods=["GET"], endpoint="attendance_rows")
    @login_required
    def attendance_rows(class_id: str):
        try:
            rows = _rows(class_id)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "rows": [_row_json(r) for r in rows]})

    @app.route("/api/classes/<class_id>/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def attendance_summary(class_id: str):
        try:
            today = parse_date_arg(request.args.get("date")) or now_local(container.timezone).date()
            summary = service.get_today_summary(
                class_id, today, viewer_id=current_user_id(), viewer_role=current_role()
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify(
            {
                "success": True,
                "date": today.strftime("%Y-%m-%d"),
                "late": summary.late,
                "on_time": summary.on_time,
                "absent": summary.absent,
            }
        )

    @app.route("/api/classes/<class_id>/attendance/tally", methods=["GET"], endpoint="attendance_tally")
    @login_required
    def attendance_tally(class_id: str):
        if current_role() == Role.STUDENT:
            students = [(current_user_id(), service.get_tally(class_id, current_user_id()))]
        else:
            students = [(s.user_id, s.tally) for s in service.get_class_tallies(class_id)]

        return jsonify(
            {
                "success": True,
                "tallies": [
                    {
                        "user_id": user_id,
                        "absent": t.absent,
                        "late": t.late,
                        "early": t.early,
                        "extra": t.extra,
                        "effective": t.effective,
                    }
                    for user_id, t in students
                ],
            }
        )

    @app.route("/api/classes/<class_id>/attendance/export.csv", methods=["GET"], endpoint="attendance_export")
    @login_required
    def attendance_export(class_id: str):
        try:
            rows = _rows(class_id)
        except ValidationError as e:
            return json_error(str(e), 400)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for row in service.export_rows(rows):
            writer.writerow(row)

        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=Attendance_{class_id}.csv"},
        )

    @app.route(
        "/api/classes/<class_id>/attendance/<user_id>/<log_id>/excused",
        methods=["POST"],
        endpoint="attendance_set_excused",
    )
    @login_required
    def attendance_set_excused(class_id: str, user_id: str, log_id: str):
        data = request.get_json(silent=True) or {}
        try:
            service.set_excused(
                current_role=current_role(),
                class_id=class_id,
                user_id=user_id,
                log_id=log_id,
                excused=bool(data.get("excused", True)),
            )
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True})

    @app.route("/api/classes/<class_id>/attendance/exclude", methods=["POST"], endpoint="attendance_exclude")
    @login_required
    def attendance_exclude(class_id: str):
        data = request.get_json(silent=True) or {}
        try:
            start = parse_date_arg(data.get("start"))
            end = parse_date_arg(data.get("end"))
            if not start or not end:
                raise ValidationError("Start and end dates are required")
            removed = service.exclude_range(current_role=current_role(), class_id=class_id, start=start, end=end)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "removed": removed})
