from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import FeedbackStatus, FeedbackType, Role


@dataclass(frozen=True)
class Feedback:
    feedback_id: int
    feedback_type: FeedbackType
    message: str
    status: FeedbackStatus
    is_anonymous: bool = False
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    user_role: Optional[Role] = None
    college_code: Optional[str] = None
    submitted_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.feedback_id),
            "userId": str(self.user_id) if self.user_id is not None else None,
            "userName": self.user_name,
            "userRole": self.user_role.value if self.user_role else None,
            "type": self.feedback_type.value,
            "message": self.message,
            "isAnonymous": self.is_anonymous,
            "status": self.status.value,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
        }


@dataclass(frozen=True)
class NewFeedback:
    feedback_type: FeedbackType
    message: str
    is_anonymous: bool
    user_id: Optional[int]
    user_name: Optional[str]
    user_role: Optional[Role]
    college_code: Optional[str]
    submitted_at: datetime
