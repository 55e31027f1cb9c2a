from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/todos", methods=["GET"], endpoint="api_list_todos")
    @login_required
    def list_todos():
        return jsonify([t.to_dict() for t in container.todo_service.list_todos(current_user().user_id)])

    @app.route("/api/todos", methods=["POST"], endpoint="api_add_todo")
    @login_required
    def add_todo():
        data = request.get_json(silent=True) or {}
        todo = container.todo_service.add(current_user().user_id, data.get("text"))
        return jsonify(todo.to_dict()), 201

    @app.route("/api/todos/<int:todo_id>", methods=["PUT"], endpoint="api_update_todo")
    @login_required
    def update_todo(todo_id: int):
        data = request.get_json(silent=True) or {}
        user_id = current_user().user_id
        if data:
            todo = container.todo_service.update(user_id, todo_id, data)
        else:
            todo = container.todo_service.toggle(user_id, todo_id)
        return jsonify(todo.to_dict())

    @app.route("/api/todos/<int:todo_id>", methods=["DELETE"], endpoint="api_delete_todo")
    @login_required
    def delete_todo(todo_id: int):
        container.todo_service.delete(current_user().user_id, todo_id)
        return jsonify({"message": "Deleted", "id": str(todo_id)})
