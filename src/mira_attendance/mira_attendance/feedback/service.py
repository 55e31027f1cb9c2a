from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from ..common.datetime_utils import now_local
from ..common.tenancy import is_tenant_scoped
from ..common.validators import parse_enum, require_non_empty
from ..core.enums import MANAGEMENT_ROLES, FeedbackStatus, FeedbackType
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Feedback, NewFeedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, feedback: FeedbackRepository, *, clock: Callable[[], datetime] = now_local):
        self._feedback = feedback
        self._clock = clock

    def submit(self, current_user, *, feedback_type: Any, message: str, is_anonymous: bool = False) -> Feedback:
        """Anonymous feedback keeps only the sender's college so it still reaches the right admins."""

        kind = parse_enum(FeedbackType, feedback_type, "feedback type")
        message = require_non_empty(message, "message")
        anonymous = bool(is_anonymous)

        feedback_id = self._feedback.create(
            NewFeedback(
                feedback_type=kind,
                message=message,
                is_anonymous=anonymous,
                user_id=None if anonymous else current_user.user_id,
                user_name=None if anonymous else current_user.name,
                user_role=None if anonymous else current_user.role,
                college_code=current_user.college_code,
                submitted_at=self._clock(),
            )
        )
        logger.info("Feedback %s (%s) submitted", feedback_id, kind.value)
        return self._get(feedback_id)

    def list_feedback(self, current_user) -> list[Feedback]:
        if current_user.role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You do not have permission to view feedback")
        college = current_user.college_code if is_tenant_scoped(current_user) else None
        return list(self._feedback.list_feedback(college_code=college))

    def update_status(self, feedback_id: int, status: Any, current_user) -> Feedback:
        new_status = parse_enum(FeedbackStatus, status, "status")
        item = self._get(feedback_id)
        if is_tenant_scoped(current_user) and item.college_code != current_user.college_code:
            raise NotFoundError("Feedback not found")
        self._feedback.set_status(int(feedback_id), new_status)
        return self._get(feedback_id)

    def _get(self, feedback_id: int) -> Feedback:
        item = self._feedback.get(int(feedback_id))
        if not item:
            raise NotFoundError("Feedback not found")
        return item
