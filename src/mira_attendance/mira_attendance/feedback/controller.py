from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user, login_required, roles_required
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES


def register(app: Flask, container: Container) -> None:
    @app.route("/api/feedback", methods=["GET"], endpoint="api_list_feedback")
    @roles_required(*MANAGEMENT_ROLES)
    def list_feedback():
        items = container.feedback_service.list_feedback(current_user())
        return jsonify([f.to_dict() for f in items])

    @app.route("/api/feedback", methods=["POST"], endpoint="api_submit_feedback")
    @login_required
    def submit_feedback():
        data = request.get_json(silent=True) or {}
        item = container.feedback_service.submit(
            current_user(),
            feedback_type=data.get("type"),
            message=data.get("message"),
            is_anonymous=bool(data.get("isAnonymous")),
        )
        return jsonify(item.to_dict()), 201

    @app.route("/api/feedback/<int:feedback_id>/status", methods=["PUT"], endpoint="api_feedback_status")
    @roles_required(*MANAGEMENT_ROLES)
    def update_feedback_status(feedback_id: int):
        data = request.get_json(silent=True) or {}
        return jsonify(container.feedback_service.update_status(feedback_id, data.get("status"), current_user()).to_dict())
