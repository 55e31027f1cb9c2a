from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import ApplicationStatus, ApplicationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import Application
from .repository import ApplicationRepository

_COLUMNS = "application_id, user_id, pin, app_type, payload, status, created_at"


def _row_to_application(r: dict) -> Application:
    return Application(
        application_id=int(r["application_id"]),
        user_id=int(r["user_id"]),
        pin=r["pin"],
        app_type=ApplicationType(r["app_type"]),
        status=ApplicationStatus(r["status"]),
        payload=load_json(r.get("payload"), default={}),
        created_at=r.get("created_at"),
    )


class MySQLApplicationRepository(ApplicationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, pin: str, app_type: ApplicationType, payload: dict) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO applications(user_id, pin, app_type, payload, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), pin, app_type.value, dump_json(payload), ApplicationStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get(self, application_id: int) -> Optional[Application]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM applications WHERE application_id=%s", (int(application_id),))
            r = fetchone(cur)
            return _row_to_application(r) if r else None

    def list_applications(
        self,
        *,
        status: Optional[ApplicationStatus] = None,
        pin: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[Application]:
        where = []
        params: list[Any] = []
        if status:
            where.append("status=%s")
            params.append(status.value)
        if pin:
            where.append("pin=%s")
            params.append(pin)
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))

        sql = f"SELECT {_COLUMNS} FROM applications"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, application_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_application(r) for r in fetchall(cur)]

    def set_status(self, application_id: int, status: ApplicationStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE applications SET status=%s WHERE application_id=%s AND status=%s",
                (status.value, int(application_id), ApplicationStatus.PENDING.value),
            )
            return cur.rowcount > 0
