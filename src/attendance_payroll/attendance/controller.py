from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.http import admin_required, api_view, json_body, json_ok
from ..container import Container
from ..core.exceptions import RecordNotFound


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _date_arg(value, employee_id: int):
        return parse_iso_date(value) if value else service.open_work_date(employee_id)

    @app.route("/api/attendance/<int:employee_id>/status", methods=["GET"], endpoint="attendance_status")
    @api_view
    def attendance_status(employee_id: int):
        work_date = _date_arg(request.args.get("date"), employee_id)
        status = service.get_status(employee_id, work_date)
        return json_ok({"employee_id": employee_id, "work_date": work_date.isoformat(), "status": status.value})

    @app.route("/api/attendance/<int:employee_id>/today", methods=["GET"], endpoint="attendance_today")
    @api_view
    def attendance_today(employee_id: int):
        return json_ok(service.get_today(employee_id).to_dict())

    @app.route("/api/attendance/<int:employee_id>/action", methods=["POST"], endpoint="attendance_action")
    @api_view
    def attendance_action(employee_id: int):
        data = json_body()
        work_date = parse_iso_date(data["date"]) if data.get("date") else None
        record = service.perform_action(employee_id, work_date, data.get("image"))
        status = service.get_status(employee_id, record.work_date)
        return json_ok(record.to_dict(), status=200, status_after=status.value)

    @app.route("/api/attendance/<int:employee_id>/history", methods=["GET"], endpoint="attendance_history")
    @api_view
    def attendance_history(employee_id: int):
        month = request.args.get("month") or service.local_today().strftime("%Y-%m")
        year, month_num = parse_month(month)
        history = service.history(employee_id, year, month_num)
        return json_ok({"month": month, "rows": [r.to_dict() for r in history.rows], "totals": history.totals.to_dict()})

    @app.route("/api/admin/records/<int:employee_id>/<work_date>", methods=["PUT"], endpoint="admin_record_update")
    @api_view
    @admin_required
    def admin_record_update(employee_id: int, work_date: str):
        record = service.admin_update(employee_id, parse_iso_date(work_date), json_body())
        return json_ok(record.to_dict())

    @app.route("/api/admin/records/<int:employee_id>/<work_date>", methods=["DELETE"], endpoint="admin_record_delete")
    @api_view
    @admin_required
    def admin_record_delete(employee_id: int, work_date: str):
        service.admin_delete(employee_id, parse_iso_date(work_date))
        return json_ok()

    @app.route("/api/admin/records/<int:employee_id>/<work_date>/images", methods=["GET"], endpoint="admin_record_images")
    @api_view
    @admin_required
    def admin_record_images(employee_id: int, work_date: str):
        record = container.attendance_repo.get_record(employee_id, parse_iso_date(work_date))
        if not record:
            raise RecordNotFound(f"No attendance record for employee {employee_id} on {work_date}")
        return json_ok(record.to_dict(include_images=True))

    @app.route("/api/admin/records/<int:employee_id>/<work_date>/salary", methods=["POST"], endpoint="admin_record_salary")
    @api_view
    @admin_required
    def admin_record_salary(employee_id: int, work_date: str):
        record = container.salary_service.calculate_for(employee_id, parse_iso_date(work_date))
        return json_ok(record.to_dict())
