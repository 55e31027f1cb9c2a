from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import USER_FIELD_MAP, LoginOtp, NewUser, User
from .repository import OtpRepository, UserRepository

_USER_COLUMNS = """
    user_id, pin, name, role, branch, year, college_code, email, email_verified,
    parent_email, parent_email_verified, phone_number, image_url, reference_image_url,
    password_hash, access_revoked, created_at, updated_at
"""

_UPDATABLE_COLUMNS = frozenset(USER_FIELD_MAP.values()) | {"password_hash"}


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        pin=row["pin"],
        name=row["name"],
        role=Role(row["role"]),
        branch=row["branch"],
        year=int(row["year"]) if row.get("year") is not None else None,
        college_code=row.get("college_code"),
        email=row.get("email"),
        email_verified=bool(row.get("email_verified")),
        parent_email=row.get("parent_email"),
        parent_email_verified=bool(row.get("parent_email_verified")),
        phone_number=row.get("phone_number"),
        image_url=row.get("image_url"),
        reference_image_url=row.get("reference_image_url"),
        password_hash=row.get("password_hash"),
        access_revoked=bool(row.get("access_revoked")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_pin(self, pin: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE UPPER(pin)=UPPER(%s)", (pin,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_users(self, *, role: Optional[Role] = None, college_code: Optional[str] = None) -> Sequence[User]:
        where = []
        params: list[Any] = []
        if role:
            where.append("role=%s")
            params.append(role.value)
        if college_code:
            where.append("college_code=%s")
            params.append(college_code)

        sql = f"SELECT {_USER_COLUMNS} FROM users"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_user(r) for r in fetchall(cur)]

    def create_user(self, new_user: NewUser) -> int:
        with db_cursor(self._conn_factory, conflict_message="A user with this PIN already exists") as (_, cur):
            cur.execute(
                """
                INSERT INTO users(pin, name, role, branch, year, college_code, email, parent_email,
                                  phone_number, image_url, reference_image_url, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new_user.pin,
                    new_user.name,
                    new_user.role.value,
                    new_user.branch,
                    new_user.year,
                    new_user.college_code,
                    new_user.email,
                    new_user.parent_email,
                    new_user.phone_number,
                    new_user.image_url,
                    new_user.reference_image_url,
                    new_user.password_hash,
                ),
            )
            return int(cur.lastrowid)

    def update_user(self, user_id: int, changes: Mapping[str, Any]) -> bool:
        columns = [c for c in changes if c in _UPDATABLE_COLUMNS]
        if not columns:
            return False

        assignments = ", ".join(f"{c}=%s" for c in columns)
        values = [changes[c].value if isinstance(changes[c], Role) else changes[c] for c in columns]

        with db_cursor(self._conn_factory, conflict_message="A user with this PIN already exists") as (_, cur):
            cur.execute(f"UPDATE users SET {assignments} WHERE user_id=%s", (*values, int(user_id)))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0


class MySQLOtpRepository(OtpRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, *, user_id: int, otp_code: str, expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO login_otps(user_id, otp_code, expires_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE otp_code=VALUES(otp_code), expires_at=VALUES(expires_at)
                """,
                (int(user_id), otp_code, expires_at),
            )

    def get(self, user_id: int) -> Optional[LoginOtp]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, otp_code, expires_at FROM login_otps WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            if not row:
                return None
            return LoginOtp(user_id=int(row["user_id"]), otp_code=row["otp_code"], expires_at=row["expires_at"])

    def delete(self, user_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM login_otps WHERE user_id=%s", (int(user_id),))
