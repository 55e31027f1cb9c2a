from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import FeedbackStatus, FeedbackType, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Feedback, NewFeedback
from .repository import FeedbackRepository

_COLUMNS = (
    "feedback_id, user_id, user_name, user_role, college_code, feedback_type, "
    "message, is_anonymous, status, submitted_at"
)


def _row_to_feedback(r: dict) -> Feedback:
    return Feedback(
        feedback_id=int(r["feedback_id"]),
        feedback_type=FeedbackType(r["feedback_type"]),
        message=r["message"],
        status=FeedbackStatus(r["status"]),
        is_anonymous=bool(r["is_anonymous"]),
        user_id=int(r["user_id"]) if r.get("user_id") is not None else None,
        user_name=r.get("user_name"),
        user_role=Role(r["user_role"]) if r.get("user_role") else None,
        college_code=r.get("college_code"),
        submitted_at=r.get("submitted_at"),
    )


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, item: NewFeedback) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO feedback(user_id, user_name, user_role, college_code, feedback_type,
                                     message, is_anonymous, status, submitted_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    item.user_id,
                    item.user_name,
                    item.user_role.value if item.user_role else None,
                    item.college_code,
                    item.feedback_type.value,
                    item.message,
                    1 if item.is_anonymous else 0,
                    FeedbackStatus.NEW.value,
                    item.submitted_at,
                ),
            )
            return int(cur.lastrowid)

    def get(self, feedback_id: int) -> Optional[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM feedback WHERE feedback_id=%s", (int(feedback_id),))
            r = fetchone(cur)
            return _row_to_feedback(r) if r else None

    def list_feedback(self, *, college_code: Optional[str] = None) -> Sequence[Feedback]:
        sql = f"SELECT {_COLUMNS} FROM feedback"
        params: list[Any] = []
        if college_code:
            sql += " WHERE college_code=%s"
            params.append(college_code)
        sql += " ORDER BY submitted_at DESC, feedback_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_feedback(r) for r in fetchall(cur)]

    def set_status(self, feedback_id: int, status: FeedbackStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE feedback SET status=%s WHERE feedback_id=%s", (status.value, int(feedback_id)))
