from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Todo
from .repository import TodoRepository

_COLUMNS = "todo_id, user_id, text, completed, created_at"
_UPDATABLE = ("text", "completed")


def _row_to_todo(r: dict) -> Todo:
    return Todo(
        todo_id=int(r["todo_id"]),
        user_id=int(r["user_id"]),
        text=r["text"],
        completed=bool(r["completed"]),
        created_at=r.get("created_at"),
    )


class MySQLTodoRepository(TodoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: int) -> Sequence[Todo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM todos WHERE user_id=%s ORDER BY created_at DESC, todo_id DESC",
                (int(user_id),),
            )
            return [_row_to_todo(r) for r in fetchall(cur)]

    def get(self, todo_id: int) -> Optional[Todo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM todos WHERE todo_id=%s", (int(todo_id),))
            r = fetchone(cur)
            return _row_to_todo(r) if r else None

    def create(self, *, user_id: int, text: str, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO todos(user_id, text, completed, created_at) VALUES(%s,%s,0,%s)",
                (int(user_id), text, created_at),
            )
            return int(cur.lastrowid)

    def update(self, todo_id: int, changes: Mapping[str, Any]) -> None:
        sets = []
        params: list[Any] = []
        for key in _UPDATABLE:
            if key in changes:
                sets.append(f"{key}=%s")
                params.append(int(changes[key]) if key == "completed" else changes[key])
        if not sets:
            return
        params.append(int(todo_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE todos SET {', '.join(sets)} WHERE todo_id=%s", tuple(params))

    def delete(self, todo_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM todos WHERE todo_id=%s", (int(todo_id),))
