from __future__ import annotations

import io
from datetime import timedelta

from flask import Flask, jsonify, request, send_file, session

from ..common.datetime_utils import today_local
from ..common.web import admin_required, login_required, payload, pick
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = payload()
        rec = svc.mark(
            subject_id=session["user_id"],
            work_date=pick(data, "date", "work_date", default=today_local()),
            status=pick(data, "status", default=""),
            check_in_time=pick(data, "check_in_time", "checkIn"),
            check_out_time=pick(data, "check_out_time", "checkOut"),
        )
        return jsonify({"success": True, "record": svc.to_dict(rec)})

    @app.route("/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        today = today_local()
        start = request.args.get("start") or (today - timedelta(days=30))
        end = request.args.get("end") or today
        rows = svc.list_for_range(session["user_id"], start, end)
        return jsonify({"success": True, "records": [svc.to_dict(r) for r in rows]})

    @app.route("/attendance/summary", methods=["GET"], endpoint="my_attendance_summary")
    @login_required
    def my_attendance_summary():
        month = request.args.get("month") or today_local()
        return jsonify({"success": True, "summary": svc.summary(session["user_id"], month).as_dict()})

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        today = today_local()
        day = request.args.get("date") or today
        start = request.args.get("start") or (today - timedelta(days=6))
        end = request.args.get("end") or today
        return jsonify(
            {
                "success": True,
                "today": svc.daily_summary(day).as_dict(),
                "history": svc.history(start, end),
            }
        )

    @app.route("/admin/attendance/bulk", methods=["POST"], endpoint="admin_attendance_bulk")
    @admin_required
    def admin_attendance_bulk():
        data = request.get_json(silent=True) or {}
        statuses = data.get("statuses")
        if not isinstance(statuses, dict):
            raise ValidationError("statuses must map employee ids to a status", field="statuses")
        summary = svc.mark_bulk(
            work_date=pick(data, "date", "work_date", default=today_local()),
            statuses=statuses,
            check_in_time=pick(data, "check_in_time", "checkIn"),
        )
        return jsonify({"success": True, "summary": summary.as_dict()})

    @app.route("/admin/attendance/export", methods=["GET"], endpoint="admin_attendance_export")
    @admin_required
    def admin_attendance_export():
        today = today_local()
        start = request.args.get("start") or today.replace(day=1)
        end = request.args.get("end") or today

        if (request.args.get("format") or "csv").lower() == "xlsx":
            return send_file(
                io.BytesIO(svc.export_excel(start, end)),
                download_name="attendance.xlsx",
                as_attachment=True,
                mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )

        csv_bytes = svc.export_csv(start, end).encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance.csv"},
        )
