from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user, login_required, roles_required
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES, TEACHING_ROLES
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/syllabus", methods=["GET"], endpoint="api_list_syllabus")
    @login_required
    def list_syllabus():
        items = container.syllabus_service.list_coverage(
            current_user(),
            branch=request.args.get("branch"),
            year=request.args.get("year"),
        )
        return jsonify([s.to_dict() for s in items])

    @app.route("/api/syllabus/<int:coverage_id>", methods=["PUT"], endpoint="api_update_syllabus")
    @roles_required(*MANAGEMENT_ROLES, *TEACHING_ROLES)
    def update_syllabus(coverage_id: int):
        data = request.get_json(silent=True) or {}
        item = container.syllabus_service.update(
            coverage_id,
            current_user(),
            topics_completed=data.get("topicsCompleted"),
            total_topics=data.get("totalTopics"),
        )
        return jsonify(item.to_dict())

    @app.route("/api/students/<pin>/results", methods=["GET"], endpoint="api_student_results")
    @login_required
    def student_results(pin: str):
        user = current_user()
        if user.role not in MANAGEMENT_ROLES | TEACHING_ROLES and user.pin.upper() != pin.upper():
            raise AuthorizationError("You do not have permission to perform this action")
        student = container.user_service.get_visible_user(pin, user)
        return jsonify([r.to_dict() for r in container.results_service.results_for_pin(student.pin)])
