from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.web import admin_required, as_bool, login_required, payload, pick
from ..container import Container
from ..core.enums import SortOrder
from ..core.exceptions import ValidationError

_FIELD_ALIASES = {
    "name": ("name",),
    "start_date": ("start_date", "startDate"),
    "end_date": ("end_date", "endDate"),
    "is_range": ("is_range", "isDateRange"),
    "holiday_type": ("holiday_type", "type"),
}


def _order_arg() -> SortOrder:
    raw = (request.args.get("order") or SortOrder.ASC.value).lower()
    try:
        return SortOrder(raw)
    except ValueError:
        raise ValidationError("order must be asc or desc", field="order")


def _holiday_fields(data: dict) -> dict:
    fields = {}
    for field, names in _FIELD_ALIASES.items():
        if any(n in data for n in names):
            fields[field] = pick(data, *names)
    if "is_range" in fields:
        fields["is_range"] = as_bool(fields["is_range"])
    return fields


def register(app: Flask, container: Container) -> None:
    svc = container.holiday_service

    @app.route("/holidays", methods=["GET"], endpoint="holidays")
    @login_required
    def holidays():
        today = today_local()
        order = _order_arg()
        return jsonify(
            {
                "success": True,
                "upcoming": [svc.to_dict(h, today=today) for h in svc.list_upcoming(today, order=order)],
                "past": [svc.to_dict(h, today=today) for h in svc.list_past(today, order=order)],
            }
        )

    @app.route("/holidays/active", methods=["GET"], endpoint="holidays_active")
    @login_required
    def holidays_active():
        day = request.args.get("date") or today_local()
        return jsonify({"success": True, "holidays": [svc.to_dict(h) for h in svc.active_on(day)]})

    @app.route("/admin/holidays", methods=["POST"], endpoint="admin_holiday_add")
    @admin_required
    def admin_holiday_add():
        fields = _holiday_fields(payload())
        h = svc.add(
            name=fields.get("name", ""),
            start_date=fields.get("start_date"),
            end_date=fields.get("end_date"),
            is_range=fields.get("is_range", False),
            holiday_type=fields.get("holiday_type", "Other"),
        )
        return jsonify({"success": True, "holiday": svc.to_dict(h)}), 201

    @app.route("/admin/holidays/<holiday_id>", methods=["PUT"], endpoint="admin_holiday_update")
    @admin_required
    def admin_holiday_update(holiday_id: str):
        h = svc.update(holiday_id, **_holiday_fields(payload()))
        return jsonify({"success": True, "holiday": svc.to_dict(h)})

    @app.route("/admin/holidays/<holiday_id>", methods=["DELETE"], endpoint="admin_holiday_delete")
    @admin_required
    def admin_holiday_delete(holiday_id: str):
        svc.remove(holiday_id)
        return jsonify({"success": True})
