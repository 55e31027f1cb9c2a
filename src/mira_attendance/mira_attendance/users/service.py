from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.auth import SessionUser
from ..common.datetime_utils import now_local
from ..common.tenancy import apply_tenant_filter, can_see, is_tenant_scoped
from ..common.validators import parse_enum, require_min_length, require_non_empty
from ..core.constants import DEFAULT_OTP_TTL_MINUTES, MIN_PASSWORD_LENGTH
from ..core.enums import MANAGEMENT_ROLES, TEACHING_ROLES, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    EmailDeliveryError,
    NotFoundError,
    ValidationError,
)
from .model import SELF_EDITABLE_COLUMNS, USER_FIELD_MAP, NewUser, User
from .repository import OtpRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user: SessionUser
    otp_required: bool = False


def _generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


class AuthService:
    """Use case: authenticate user (login), with an emailed OTP step for super admins."""

    def __init__(
        self,
        users: UserRepository,
        otps: OtpRepository,
        email_service=None,
        *,
        otp_ttl_minutes: int = DEFAULT_OTP_TTL_MINUTES,
        otp_fallback_email: Optional[str] = None,
        log_otp_codes: bool = False,
        clock: Callable[[], datetime] = now_local,
        otp_generator: Callable[[], str] = _generate_otp,
    ):
        self._users = users
        self._otps = otps
        self._email = email_service
        self._otp_ttl = timedelta(minutes=int(otp_ttl_minutes))
        self._otp_fallback_email = otp_fallback_email
        self._log_otp_codes = log_otp_codes
        self._clock = clock
        self._otp_generator = otp_generator

    def authenticate(self, pin: str, password: str) -> User:
        user = self._users.get_by_pin((pin or "").strip())
        if not user or not user.password_hash:
            raise AuthenticationError("Invalid PIN or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid PIN or password")

        if user.access_revoked:
            raise AuthorizationError("Access revoked for this user.")
        return user

    def login(self, pin: str, password: str) -> LoginResult:
        user = self.authenticate(pin, password)
        session_user = SessionUser.from_user(user)

        if user.role == Role.SUPER_ADMIN:
            self.send_login_otp(user)
            return LoginResult(user=session_user, otp_required=True)

        logger.info("User %s logged in", user.pin)
        return LoginResult(user=session_user)

    def send_login_otp(self, user: User) -> None:
        otp = self._otp_generator()
        self._otps.save(user_id=user.user_id, otp_code=otp, expires_at=self._clock() + self._otp_ttl)

        recipient = user.email or self._otp_fallback_email
        subject = "Your Mira Attendance Login OTP"
        body = f"Hello {user.name},\n\nYour OTP is: {otp}\n\nRegards,\nMira Attendance"

        if self._log_otp_codes:
            logger.info("Login OTP for %s: %s", user.pin, otp)

        if not self._email or not recipient:
            if self._log_otp_codes:
                return
            raise EmailDeliveryError("No email address available to deliver the login OTP")

        try:
            self._email.send(recipient, subject, body)
        except EmailDeliveryError:
            if self._log_otp_codes:
                logger.warning("OTP email for %s not delivered; code was logged instead", user.pin)
                return
            raise

    def verify_login_otp(self, user_id: int, otp: str) -> SessionUser:
        stored = self._otps.get(int(user_id))
        if not stored or stored.otp_code != (otp or "").strip():
            raise AuthenticationError("Invalid OTP")
        if stored.expires_at < self._clock():
            self._otps.delete(int(user_id))
            raise AuthenticationError("OTP has expired")

        self._otps.delete(int(user_id))
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("Invalid OTP")
        return SessionUser.from_user(user)


class UserService:
    """Use case: manage users."""

    def __init__(self, users: UserRepository):
        self._users = users

    # ---- reads -------------------------------------------------------
    def list_users(self, current_user, *, role: Optional[Role] = None, pin: Optional[str] = None) -> list[User]:
        college = current_user.college_code if is_tenant_scoped(current_user) else None
        users = self._users.list_users(role=role, college_code=college)
        if pin:
            users = [u for u in users if u.pin.upper() == pin.strip().upper()]
        return apply_tenant_filter(users, current_user, lambda u: u.college_code)

    def get_by_id(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_user_by_pin(self, pin: str) -> User:
        user = self._users.get_by_pin((pin or "").strip())
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_visible_user(self, pin: str, current_user) -> User:
        user = self.get_user_by_pin(pin)
        if not can_see(current_user, user.college_code):
            raise NotFoundError("User not found")
        return user

    def get_student_by_pin(self, pin: str, current_user=None) -> User:
        user = self._users.get_by_pin((pin or "").strip())
        if not user or user.role != Role.STUDENT:
            raise NotFoundError("Student not found")
        if current_user is not None and not can_see(current_user, user.college_code):
            raise NotFoundError("Student not found")
        return user

    def list_faculty(self, current_user) -> list[User]:
        return [u for u in self.list_users(current_user) if u.role in TEACHING_ROLES]

    # ---- writes ------------------------------------------------------
    def create_user(self, data: Mapping[str, Any], current_user) -> User:
        if current_user.role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You do not have permission to add users")

        name = require_non_empty(data.get("name", ""), "Name")
        pin = require_non_empty(data.get("pin", ""), "PIN")
        branch = require_non_empty(data.get("branch", ""), "Branch")
        role = parse_enum(Role, data.get("role"), "role")

        if role == Role.SUPER_ADMIN and current_user.role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a super admin can create another super admin")

        password = data.get("password")
        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        college_code = data.get("college_code")
        if is_tenant_scoped(current_user):
            college_code = current_user.college_code

        user_id = self._users.create_user(
            NewUser(
                pin=pin,
                name=name,
                role=role,
                branch=branch,
                password_hash=password_hash,
                year=self._parse_year(data.get("year")),
                college_code=college_code,
                email=data.get("email"),
                parent_email=data.get("parent_email"),
                phone_number=data.get("phoneNumber"),
                image_url=data.get("imageUrl"),
                reference_image_url=data.get("referenceImageUrl"),
            )
        )
        logger.info("User %s created by %s", pin, current_user.pin)
        return self.get_by_id(user_id)

    def update_user(self, pin: str, data: Mapping[str, Any], current_user) -> User:
        user = self.get_visible_user(pin, current_user)
        is_self = user.user_id == current_user.user_id
        is_manager = current_user.role in MANAGEMENT_ROLES
        if not is_manager and not is_self:
            raise AuthorizationError("You do not have permission to edit this user")

        changes: dict[str, Any] = {}
        for key, column in USER_FIELD_MAP.items():
            if key in data:
                changes[column] = data[key]

        if "password" in data and data["password"]:
            require_min_length(data["password"], "Password", MIN_PASSWORD_LENGTH)
            changes["password_hash"] = generate_password_hash(data["password"])

        if not is_manager:
            blocked = set(changes) - SELF_EDITABLE_COLUMNS
            if blocked:
                raise AuthorizationError(f"You cannot change: {', '.join(sorted(blocked))}")

        if "role" in changes:
            changes["role"] = parse_enum(Role, changes["role"], "role")
            if changes["role"] == Role.SUPER_ADMIN and current_user.role != Role.SUPER_ADMIN:
                raise AuthorizationError("Only a super admin can grant the super admin role")
        if "year" in changes:
            changes["year"] = self._parse_year(changes["year"])
        if "college_code" in changes and is_tenant_scoped(current_user):
            changes["college_code"] = current_user.college_code
        for flag in ("email_verified", "parent_email_verified", "access_revoked"):
            if flag in changes:
                changes[flag] = bool(changes[flag])
        for required in ("name", "pin", "branch"):
            if required in changes:
                changes[required] = require_non_empty(changes[required], required.capitalize())

        if changes:
            self._users.update_user(user.user_id, changes)
        return self.get_by_id(user.user_id)

    def delete_user(self, pin: str, current_user, *, hard: bool = False) -> User:
        """Soft delete toggles access; hard delete removes the account."""

        if current_user.role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You do not have permission to remove users")

        user = self.get_visible_user(pin, current_user)
        if user.user_id == current_user.user_id:
            raise ValidationError("You cannot remove your own account")
        if user.role == Role.SUPER_ADMIN and current_user.role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a super admin can remove a super admin")

        if hard:
            if not self._users.delete_by_id(user.user_id):
                raise NotFoundError("User not found")
            logger.info("User %s deleted by %s", user.pin, current_user.pin)
            return user

        self._users.update_user(user.user_id, {"access_revoked": not user.access_revoked})
        logger.info("User %s access_revoked=%s by %s", user.pin, not user.access_revoked, current_user.pin)
        return self.get_by_id(user.user_id)

    @staticmethod
    def _parse_year(value: Any) -> Optional[int]:
        if value in (None, ""):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError("Year must be a number")
