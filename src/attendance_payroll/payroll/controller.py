from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import month_bounds, parse_iso_date, parse_month
from ..common.http import admin_required, api_view, json_ok
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.payroll_report_service
    attendance = container.attendance_service

    @app.route("/api/admin/records", methods=["GET"], endpoint="admin_records")
    @api_view
    @admin_required
    def admin_records():
        # Defaults to the current month when no range is given.
        today = attendance.local_today()
        month_start, month_end = month_bounds(today.year, today.month)
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        start = parse_iso_date(start_s) if start_s else month_start
        end = parse_iso_date(end_s) if end_s else month_end
        employee_id = optional_int(request.args.get("employee_id"), "employee_id")

        rows = reports.list_records(start=start, end=end, employee_id=employee_id)
        return json_ok(
            [r.to_dict() for r in rows],
            start=start.isoformat(),
            end=end.isoformat(),
        )

    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @api_view
    @admin_required
    def admin_dashboard():
        return json_ok(reports.dashboard(attendance.local_today()))

    @app.route("/api/admin/reports/monthly", methods=["GET"], endpoint="admin_monthly_report")
    @api_view
    @admin_required
    def admin_monthly_report():
        month = request.args.get("month") or attendance.local_today().strftime("%Y-%m")
        year, month_num = parse_month(month)
        return json_ok(reports.monthly_report(year, month_num).to_dict())
