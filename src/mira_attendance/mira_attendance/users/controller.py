from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.auth import SessionUser, current_user, login_required, roles_required
from ..common.validators import parse_enum
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES, Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _start_session(user: SessionUser, remember: bool) -> None:
        session.clear()
        session.permanent = bool(remember)
        session["user"] = user.to_session()
        logger.info("session started user_id=%s role=%s", user.user_id, user.role.value)

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def login():
        data = request.get_json(silent=True) or {}
        result = container.auth_service.login(data.get("pin", ""), data.get("password", ""))

        if result.otp_required:
            session.clear()
            session["pending_otp_user_id"] = result.user.user_id
            session["pending_remember"] = bool(data.get("remember"))
            return jsonify({"otpRequired": True, "user": {"id": str(result.user.user_id), "name": result.user.name}})

        _start_session(result.user, bool(data.get("remember")))
        user = container.user_service.get_by_id(result.user.user_id)
        return jsonify(user.to_dict())

    @app.route("/api/auth/verify-otp", methods=["POST"], endpoint="api_verify_otp")
    def verify_otp():
        pending = session.get("pending_otp_user_id")
        if not pending:
            raise AuthenticationError("No login is waiting for an OTP")

        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.verify_login_otp(int(pending), data.get("otp", ""))
        _start_session(s_user, bool(session.get("pending_remember")))
        user = container.user_service.get_by_id(s_user.user_id)
        return jsonify(user.to_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="api_me")
    @login_required
    def me():
        user = container.user_service.get_by_id(current_user().user_id)
        return jsonify(user.to_dict())

    @app.route("/api/users", methods=["GET"], endpoint="api_list_users")
    @roles_required(*MANAGEMENT_ROLES, Role.FACULTY)
    def list_users():
        role_s = request.args.get("role")
        role = parse_enum(Role, role_s, "role") if role_s else None
        users = container.user_service.list_users(current_user(), role=role, pin=request.args.get("pin"))
        return jsonify([u.to_dict() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="api_create_user")
    @roles_required(*MANAGEMENT_ROLES)
    def create_user():
        user = container.user_service.create_user(request.get_json(silent=True) or {}, current_user())
        return jsonify(user.to_dict()), 201

    @app.route("/api/users/<pin>", methods=["GET"], endpoint="api_get_user")
    @login_required
    def get_user(pin: str):
        user = container.user_service.get_visible_user(pin, current_user())
        return jsonify(user.to_dict())

    @app.route("/api/users/<pin>", methods=["PUT"], endpoint="api_update_user")
    @login_required
    def update_user(pin: str):
        user = container.user_service.update_user(pin, request.get_json(silent=True) or {}, current_user())
        return jsonify(user.to_dict())

    @app.route("/api/users/<pin>", methods=["DELETE"], endpoint="api_delete_user")
    @roles_required(*MANAGEMENT_ROLES)
    def delete_user(pin: str):
        hard = request.args.get("hard") in {"1", "true", "yes"}
        user = container.user_service.delete_user(pin, current_user(), hard=hard)
        if hard:
            return jsonify({"message": "Deleted", "id": str(user.user_id)})
        return jsonify(user.to_dict())

    @app.route("/api/faculty", methods=["GET"], endpoint="api_list_faculty")
    @login_required
    def list_faculty():
        return jsonify([u.to_dict() for u in container.user_service.list_faculty(current_user())])

    @app.route("/api/students/<pin>", methods=["GET"], endpoint="api_get_student")
    @login_required
    def get_student(pin: str):
        student = container.user_service.get_student_by_pin(pin, current_user())
        return jsonify(student.to_dict())
