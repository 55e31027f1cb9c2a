from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user, login_required, roles_required
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES, Role
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/applications", methods=["GET"], endpoint="api_list_applications")
    @login_required
    def list_applications():
        user = current_user()
        if user.role in MANAGEMENT_ROLES:
            apps = container.application_service.list_applications(user, status=request.args.get("status"))
        else:
            apps = container.application_service.list_by_user(user.user_id)
        return jsonify([a.to_dict() for a in apps])

    @app.route("/api/applications", methods=["POST"], endpoint="api_submit_application")
    @login_required
    def submit_application():
        user = current_user()
        data = request.get_json(silent=True) or {}
        pin = data.get("pin") or user.pin
        if not isinstance(pin, str):
            raise ValidationError("pin must be a string")
        if pin.upper() != user.pin.upper() and user.role not in MANAGEMENT_ROLES | {Role.FACULTY}:
            raise AuthorizationError("You can only submit applications for yourself")

        application = container.application_service.submit(
            pin=pin,
            app_type=data.get("type"),
            payload=data.get("payload"),
        )
        return jsonify(application.to_dict()), 201

    @app.route("/api/applications/<int:application_id>/status", methods=["PUT"], endpoint="api_application_status")
    @roles_required(*MANAGEMENT_ROLES)
    def update_application_status(application_id: int):
        data = request.get_json(silent=True) or {}
        application = container.application_service.update_status(application_id, data.get("status"), current_user())
        return jsonify(application.to_dict())

    @app.route("/api/students/<pin>/applications", methods=["GET"], endpoint="api_student_applications")
    @login_required
    def student_applications(pin: str):
        user = current_user()
        if user.role not in MANAGEMENT_ROLES | {Role.FACULTY} and user.pin.upper() != pin.upper():
            raise AuthorizationError("You do not have permission to perform this action")
        container.user_service.get_visible_user(pin, user)
        return jsonify([a.to_dict() for a in container.application_service.list_by_pin(pin)])
