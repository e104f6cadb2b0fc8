from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.web import admin_required, login_required, payload, pick
from ..container import Container
from .model import DocumentUpload


def register(app: Flask, container: Container) -> None:
    svc = container.leave_service

    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        data = payload()
        upload = request.files.get("document")
        document = None
        if upload and upload.filename:
            document = DocumentUpload(filename=upload.filename, stream=upload.stream, content_type=upload.mimetype)

        now = now_local()
        req = svc.submit(
            requester_id=session["user_id"],
            leave_type=pick(data, "leave_type", "leaveType"),
            start_date=pick(data, "start_date", "fromDate"),
            end_date=pick(data, "end_date", "toDate"),
            reason=pick(data, "reason", default=""),
            today=now.date(),
            now=now,
            document=document,
        )
        return jsonify({"success": True, "leave": svc.to_dict(req)}), 201

    @app.route("/leaves/mine", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        items = svc.list_for_requester(session["user_id"])
        return jsonify({"success": True, "leaves": [svc.to_dict(r) for r in items]})

    @app.route("/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        return jsonify(
            {
                "success": True,
                "pending": [svc.to_dict(r) for r in svc.list_pending()],
                "history": [svc.to_dict(r) for r in svc.list_history()],
                "counts": svc.status_counts(),
            }
        )

    @app.route("/admin/leaves/<request_id>", methods=["GET"], endpoint="admin_leave_detail")
    @admin_required
    def admin_leave_detail(request_id: str):
        return jsonify({"success": True, "leave": svc.to_dict(svc.get(request_id))})

    @app.route("/admin/leaves/<request_id>/status", methods=["PUT", "POST"], endpoint="admin_leave_decide")
    @admin_required
    def admin_leave_decide(request_id: str):
        data = payload()
        req = svc.decide(
            request_id=request_id,
            outcome=pick(data, "status", default=""),
            now=now_local(),
            decided_by=session["user_id"],
        )
        return jsonify({"success": True, "leave": svc.to_dict(req)})
