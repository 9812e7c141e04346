from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, api_view, json_body, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @api_view
    @admin_required
    def admin_employees():
        return json_ok([e.to_dict() for e in service.list_employees()])

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_employees_create")
    @api_view
    @admin_required
    def admin_employees_create():
        return json_ok(service.create(json_body()).to_dict(), status=201)

    @app.route("/api/admin/employees/<int:employee_id>", methods=["PUT"], endpoint="admin_employees_update")
    @api_view
    @admin_required
    def admin_employees_update(employee_id: int):
        return json_ok(service.update(employee_id, json_body()).to_dict())

    @app.route("/api/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="admin_employees_delete")
    @api_view
    @admin_required
    def admin_employees_delete(employee_id: int):
        service.delete(employee_id)
        return json_ok()
