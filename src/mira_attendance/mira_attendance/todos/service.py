from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Todo
from .repository import TodoRepository


class TodoService:
    def __init__(self, todos: TodoRepository, *, clock: Callable[[], datetime] = now_local):
        self._todos = todos
        self._clock = clock

    def list_todos(self, user_id: int) -> list[Todo]:
        return list(self._todos.list_for_user(int(user_id)))

    def add(self, user_id: int, text: str) -> Todo:
        text = require_non_empty(text, "text")
        todo_id = self._todos.create(user_id=int(user_id), text=text, created_at=self._clock())
        return self._owned(todo_id, user_id)

    def update(self, user_id: int, todo_id: int, data: Mapping[str, Any]) -> Todo:
        self._owned(todo_id, user_id)
        changes: dict[str, Any] = {}
        if "text" in data:
            changes["text"] = require_non_empty(data.get("text"), "text")
        if "completed" in data:
            changes["completed"] = bool(data.get("completed"))
        if changes:
            self._todos.update(int(todo_id), changes)
        return self._owned(todo_id, user_id)

    def toggle(self, user_id: int, todo_id: int) -> Todo:
        todo = self._owned(todo_id, user_id)
        return self.update(user_id, todo_id, {"completed": not todo.completed})

    def delete(self, user_id: int, todo_id: int) -> None:
        self._owned(todo_id, user_id)
        self._todos.delete(int(todo_id))

    def _owned(self, todo_id: int, user_id: int) -> Todo:
        # Someone else's item is reported as missing.
        todo = self._todos.get(int(todo_id))
        if not todo or todo.user_id != int(user_id):
            raise NotFoundError("Todo not found")
        return todo
