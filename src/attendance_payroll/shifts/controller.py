from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, api_view, json_body, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    @app.route("/api/shifts", methods=["GET"], endpoint="shifts_list")
    @api_view
    def shifts_list():
        return json_ok([s.to_dict() for s in service.list_shifts()])

    @app.route("/api/shifts/active", methods=["GET"], endpoint="shifts_active")
    @api_view
    def shifts_active():
        shift = container.attendance_service.current_shift()
        return json_ok(shift.to_dict() if shift else None)

    @app.route("/api/admin/shifts", methods=["GET"], endpoint="admin_shifts")
    @api_view
    @admin_required
    def admin_shifts():
        return json_ok([s.to_dict() for s in service.list_shifts()])

    @app.route("/api/admin/shifts", methods=["POST"], endpoint="admin_shifts_create")
    @api_view
    @admin_required
    def admin_shifts_create():
        return json_ok(service.create(json_body()).to_dict(), status=201)

    @app.route("/api/admin/shifts/<int:shift_id>", methods=["PUT"], endpoint="admin_shifts_update")
    @api_view
    @admin_required
    def admin_shifts_update(shift_id: int):
        return json_ok(service.update(shift_id, json_body()).to_dict())
