from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import LoginOtp, NewUser, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_pin(self, pin: str) -> Optional[User]:
        """Case-insensitive lookup."""

        raise NotImplementedError

    def list_users(self, *, role: Optional[Role] = None, college_code: Optional[str] = None) -> Sequence[User]:
        raise NotImplementedError

    def create_user(self, new_user: NewUser) -> int:
        raise NotImplementedError

    def update_user(self, user_id: int, changes: Mapping[str, Any]) -> bool:
        """Apply column -> value changes."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError


class OtpRepository(Protocol):
    def save(self, *, user_id: int, otp_code: str, expires_at: datetime) -> None:
        raise NotImplementedError

    def get(self, user_id: int) -> Optional[LoginOtp]:
        raise NotImplementedError

    def delete(self, user_id: int) -> None:
        raise NotImplementedError
