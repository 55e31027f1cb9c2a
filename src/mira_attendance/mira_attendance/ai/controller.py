from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import login_required, roles_required
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES, TEACHING_ROLES


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ai/status", methods=["GET"], endpoint="api_ai_status")
    @login_required
    def ai_status():
        status = container.ai_service.status()
        status["tools"] = container.ai_service.tool_names
        return jsonify(status)

    @app.route("/api/ai/<tool>", methods=["POST"], endpoint="api_ai_tool")
    @roles_required(*MANAGEMENT_ROLES, *TEACHING_ROLES)
    def ai_tool(tool: str):
        result = container.ai_service.run_tool(tool, request.get_json(silent=True) or {})
        return jsonify({"tool": tool, "result": result})
