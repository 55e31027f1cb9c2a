from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import ApplicationStatus, ApplicationType


@dataclass(frozen=True)
class Application:
    """A student request (leave, bonafide certificate, transfer certificate)."""

    application_id: int
    user_id: int
    pin: str
    app_type: ApplicationType
    status: ApplicationStatus
    payload: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.application_id),
            "userId": str(self.user_id),
            "pin": self.pin,
            "type": self.app_type.value,
            "payload": self.payload,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
