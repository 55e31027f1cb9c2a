from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus, LocationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord, LocationInfo, NewAttendance
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, user_id, user_name, user_pin, user_avatar, work_date, status, check_in_time,
    location_status, coordinates, distance_km, created_at, updated_at
"""

_UPDATABLE = frozenset(
    {"user_name", "user_avatar", "work_date", "status", "check_in_time", "location_status", "coordinates", "distance_km"}
)


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        user_name=r["user_name"],
        user_pin=r["user_pin"],
        user_avatar=r.get("user_avatar"),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=normalize_mysql_time(r.get("check_in_time")),
        location=LocationInfo(
            status=LocationStatus(r["location_status"]) if r.get("location_status") else None,
            coordinates=r.get("coordinates"),
            distance_km=float(r["distance_km"]) if r.get("distance_km") is not None else None,
        ),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_pin_and_date(self, user_pin: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_pin=%s AND work_date=%s",
                (user_pin, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        user_pin: Optional[str] = None,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        where = []
        params: list[Any] = []
        if work_date:
            where.append("work_date=%s")
            params.append(work_date)
        if user_pin:
            where.append("user_pin=%s")
            params.append(user_pin)
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))
        if start_date:
            where.append("work_date>=%s")
            params.append(start_date)
        if end_date:
            where.append("work_date<=%s")
            params.append(end_date)

        sql = f"SELECT {_COLUMNS} FROM attendance_records"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY work_date DESC, check_in_time DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, record: NewAttendance) -> int:
        with db_cursor(self._conn_factory, conflict_message="Already marked") as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, user_name, user_pin, user_avatar, work_date, status,
                                               check_in_time, location_status, coordinates, distance_km)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.user_id,
                    record.user_name,
                    record.user_pin,
                    record.user_avatar,
                    record.work_date,
                    record.status.value,
                    record.check_in_time,
                    record.location.status.value if record.location.status else None,
                    record.location.coordinates,
                    record.location.distance_km,
                ),
            )
            return int(cur.lastrowid)

    def update(self, record_id: int, changes: Mapping[str, Any]) -> bool:
        columns = [c for c in changes if c in _UPDATABLE]
        if not columns:
            return False
        values = [changes[c].value if isinstance(changes[c], Enum) else changes[c] for c in columns]
        assignments = ", ".join(f"{c}=%s" for c in columns)

        with db_cursor(self._conn_factory, conflict_message="Already marked") as (_, cur):
            cur.execute(f"UPDATE attendance_records SET {assignments} WHERE record_id=%s", (*values, int(record_id)))
            # rowcount is 0 when values are unchanged, so existence is checked by the service
            return True

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0
