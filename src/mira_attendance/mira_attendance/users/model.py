from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a student or staff member.

    Note: Pure data object (no DB access code).
    """

    user_id: int
    pin: str
    name: str
    role: Role
    branch: str
    year: Optional[int] = None
    college_code: Optional[str] = None
    email: Optional[str] = None
    email_verified: bool = False
    parent_email: Optional[str] = None
    parent_email_verified: bool = False
    phone_number: Optional[str] = None
    image_url: Optional[str] = None
    reference_image_url: Optional[str] = None
    password_hash: Optional[str] = None
    access_revoked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        """Public JSON shape (never includes the password hash)."""

        return {
            "id": str(self.user_id),
            "pin": self.pin,
            "name": self.name,
            "role": self.role.value,
            "branch": self.branch,
            "year": self.year,
            "college_code": self.college_code,
            "email": self.email,
            "email_verified": self.email_verified,
            "parent_email": self.parent_email,
            "parent_email_verified": self.parent_email_verified,
            "phoneNumber": self.phone_number,
            "imageUrl": self.image_url,
            "referenceImageUrl": self.reference_image_url,
            "access_revoked": self.access_revoked,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class NewUser:
    pin: str
    name: str
    role: Role
    branch: str
    password_hash: Optional[str]
    year: Optional[int] = None
    college_code: Optional[str] = None
    email: Optional[str] = None
    parent_email: Optional[str] = None
    phone_number: Optional[str] = None
    image_url: Optional[str] = None
    reference_image_url: Optional[str] = None


@dataclass(frozen=True)
class LoginOtp:
    user_id: int
    otp_code: str
    expires_at: datetime


# JSON key -> column for writable profile fields.
USER_FIELD_MAP = {
    "name": "name",
    "pin": "pin",
    "role": "role",
    "branch": "branch",
    "year": "year",
    "college_code": "college_code",
    "email": "email",
    "email_verified": "email_verified",
    "parent_email": "parent_email",
    "parent_email_verified": "parent_email_verified",
    "phoneNumber": "phone_number",
    "imageUrl": "image_url",
    "referenceImageUrl": "reference_image_url",
    "access_revoked": "access_revoked",
}

# Columns a user may change on their own profile.
SELF_EDITABLE_COLUMNS = frozenset(
    {"name", "email", "parent_email", "phone_number", "image_url", "password_hash"}
)
