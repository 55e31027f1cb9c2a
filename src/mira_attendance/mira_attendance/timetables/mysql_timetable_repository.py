from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Timetable
from .repository import TimetableRepository

_COLUMNS = "timetable_id, college_code, branch, year, url, updated_at, updated_by"


def _row_to_timetable(r: dict) -> Timetable:
    return Timetable(
        timetable_id=int(r["timetable_id"]),
        college_code=r["college_code"],
        branch=r["branch"],
        year=int(r["year"]),
        url=r["url"],
        updated_at=r["updated_at"],
        updated_by=r["updated_by"],
    )


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, branch: str, year: int, college_code: Optional[str] = None) -> Optional[Timetable]:
        sql = f"SELECT {_COLUMNS} FROM timetables WHERE branch=%s AND year=%s"
        params: list[Any] = [branch, int(year)]
        if college_code:
            sql += " AND college_code=%s"
            params.append(college_code)
        sql += " ORDER BY updated_at DESC LIMIT 1"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return _row_to_timetable(r) if r else None

    def upsert(
        self,
        *,
        college_code: str,
        branch: str,
        year: int,
        url: str,
        updated_at: datetime,
        updated_by: str,
    ) -> Timetable:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetables(college_code, branch, year, url, updated_at, updated_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE url=VALUES(url), updated_at=VALUES(updated_at), updated_by=VALUES(updated_by)
                """,
                (college_code, branch, int(year), url, updated_at, updated_by),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM timetables WHERE college_code=%s AND branch=%s AND year=%s",
                (college_code, branch, int(year)),
            )
            return _row_to_timetable(fetchone(cur))
