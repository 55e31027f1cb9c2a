from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user, login_required, roles_required
from ..container import Container
from ..core.enums import MANAGEMENT_ROLES


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timetables", methods=["GET"], endpoint="api_get_timetable")
    @login_required
    def get_timetable():
        timetable = container.timetable_service.get(
            request.args.get("branch"),
            request.args.get("year"),
            current_user(),
        )
        return jsonify(timetable.to_dict() if timetable else None)

    @app.route("/api/timetables", methods=["PUT"], endpoint="api_set_timetable")
    @roles_required(*MANAGEMENT_ROLES)
    def set_timetable():
        data = request.get_json(silent=True) or {}
        timetable = container.timetable_service.set(
            data.get("branch") or request.args.get("branch"),
            data.get("year") or request.args.get("year"),
            data.get("url"),
            current_user(),
        )
        return jsonify(timetable.to_dict())
