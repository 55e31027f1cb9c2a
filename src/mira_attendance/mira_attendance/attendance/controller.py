from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user, login_required, roles_required
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES, Role
from ..core.exceptions import AuthorizationError
from .geofence import Coordinates


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_list_attendance")
    @login_required
    def list_attendance():
        user_id = request.args.get("userId")
        records = container.attendance_service.list_records(
            current_user(),
            work_date=request.args.get("date"),
            user_pin=request.args.get("userPin"),
            user_id=int(user_id) if user_id and user_id.isdigit() else None,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="api_create_attendance")
    @roles_required(*MANAGEMENT_ROLES, Role.FACULTY)
    def create_attendance():
        record = container.attendance_service.create_record(request.get_json(silent=True) or {})
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/<int:record_id>", methods=["PUT"], endpoint="api_update_attendance")
    @roles_required(*MANAGEMENT_ROLES)
    def update_attendance(record_id: int):
        record = container.attendance_service.update_record(record_id, request.get_json(silent=True) or {})
        return jsonify(record.to_dict())

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="api_delete_attendance")
    @roles_required(*MANAGEMENT_ROLES)
    def delete_attendance(record_id: int):
        record = container.attendance_service.delete_record(record_id)
        return jsonify({"message": "Deleted", "id": str(record.record_id)})

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @login_required
    def check_in():
        data = request.get_json(silent=True) or {}
        record = container.attendance_service.mark_attendance(
            current_user().user_id,
            Coordinates.from_mapping(data),
            live_image=data.get("image"),
        )
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_today_attendance")
    @login_required
    def today():
        record = container.attendance_service.todays_record_for_user(current_user().user_id)
        return jsonify(record.to_dict() if record else None)

    @app.route("/api/students/<pin>/attendance", methods=["GET"], endpoint="api_student_attendance")
    @login_required
    def student_attendance(pin: str):
        user = current_user()
        if user.role not in MANAGEMENT_ROLES | {Role.FACULTY} and user.pin.upper() != pin.upper():
            raise AuthorizationError("You do not have permission to perform this action")
        container.user_service.get_student_by_pin(pin, user)
        return jsonify([r.to_dict() for r in container.attendance_service.records_for_pin(pin)])

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="api_dashboard_stats")
    @roles_required(*MANAGEMENT_ROLES, Role.FACULTY)
    def dashboard_stats():
        return jsonify(container.attendance_service.dashboard_stats(current_user()).to_dict())
