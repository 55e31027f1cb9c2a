from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import FeedbackStatus
from .model import Feedback, NewFeedback


class FeedbackRepository(Protocol):
    def create(self, item: NewFeedback) -> int:
        raise NotImplementedError

    def get(self, feedback_id: int) -> Optional[Feedback]:
        raise NotImplementedError

    def list_feedback(self, *, college_code: Optional[str] = None) -> Sequence[Feedback]:
        """Newest first."""

        raise NotImplementedError

    def set_status(self, feedback_id: int, status: FeedbackStatus) -> None:
        raise NotImplementedError
