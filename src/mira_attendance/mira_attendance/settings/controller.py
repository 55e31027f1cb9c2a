from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="api_get_settings")
    @login_required
    def get_settings():
        return jsonify(container.settings_service.get(current_user().user_id))

    @app.route("/api/settings", methods=["PUT"], endpoint="api_update_settings")
    @login_required
    def update_settings():
        settings = container.settings_service.update(current_user().user_id, request.get_json(silent=True))
        return jsonify(settings)
