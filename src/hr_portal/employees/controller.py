from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.employee_service

    @app.route("/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        employees = svc.list_employees(request.args.get("search"))
        return jsonify(
            {
                "success": True,
                "employees": [svc.to_dict(e) for e in employees],
                "top_departments": [{"department": d, "count": n} for d, n in svc.department_counts()],
            }
        )

    @app.route("/profile", methods=["GET"], endpoint="profile")
    @login_required
    def profile():
        return jsonify({"success": True, "profile": svc.to_dict(svc.get_profile(session["user_id"]))})
