from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.auth import current_user, roles_required
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES, Role
from ..core.exceptions import ValidationError
from .export import XLSX_MIMETYPE, report_to_csv, report_to_xlsx


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str, field_name: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be YYYY-MM-DD")

    def _build_report():
        first, today = container.report_service.default_range()
        start = _parse_date(request.args["start"], "start") if request.args.get("start") else first
        end = _parse_date(request.args["end"], "end") if request.args.get("end") else today
        data = container.report_service.build_attendance_report(
            start=start,
            end=end,
            current_user=current_user(),
            branch=request.args.get("branch") or None,
        )
        return data, f"attendance_{start:%Y%m%d}_{end:%Y%m%d}"

    def _attachment(body: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            body,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="api_attendance_report")
    @roles_required(*MANAGEMENT_ROLES, Role.FACULTY)
    def attendance_report():
        data, _ = _build_report()
        return jsonify({"rows": data.rows, "summary": data.summary})

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="api_attendance_report_csv")
    @roles_required(*MANAGEMENT_ROLES, Role.FACULTY)
    def attendance_report_csv():
        data, name = _build_report()
        return _attachment(report_to_csv(data), mimetype="text/csv", filename=f"{name}.csv")

    @app.route("/api/reports/attendance.xlsx", methods=["GET"], endpoint="api_attendance_report_xlsx")
    @roles_required(*MANAGEMENT_ROLES, Role.FACULTY)
    def attendance_report_xlsx():
        data, name = _build_report()
        return _attachment(report_to_xlsx(data), mimetype=XLSX_MIMETYPE, filename=f"{name}.xlsx")
