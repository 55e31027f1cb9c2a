from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import login_required
from ..container import Container
from ..core.exceptions import EmailDeliveryError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/send-email", methods=["POST"], endpoint="api_send_email")
    @login_required
    def send_email():
        data = request.get_json(silent=True) or {}
        try:
            container.email_service.send(data.get("to", ""), data.get("subject", ""), data.get("body", ""))
        except EmailDeliveryError as e:
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "message": "Email sent successfully"}), 200
