from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    pin: str
    role: Role
    branch: str
    college_code: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            name=user.name,
            pin=user.pin,
            role=user.role,
            branch=user.branch,
            college_code=user.college_code,
        )

    def to_session(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_session(cls, data: dict) -> "SessionUser":
        return cls(
            user_id=int(data["user_id"]),
            name=data["name"],
            pin=data["pin"],
            role=Role(data["role"]),
            branch=data.get("branch") or "",
            college_code=data.get("college_code"),
        )


def current_user() -> Optional[SessionUser]:
    data = session.get("user")
    if not data:
        return None
    return SessionUser.from_session(data)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return jsonify({"message": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return jsonify({"message": "Authentication required"}), 401
            if user.role not in allowed:
                return jsonify({"message": "You do not have permission to perform this action"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator
