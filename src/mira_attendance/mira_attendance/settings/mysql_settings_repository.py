from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchone, load_json
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT settings FROM user_settings WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return load_json(r["settings"]) if r else None

    def save(self, user_id: int, settings: dict) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_settings(user_id, settings) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE settings=VALUES(settings)
                """,
                (int(user_id), dump_json(settings)),
            )
