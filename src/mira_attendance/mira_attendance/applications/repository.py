from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ApplicationStatus, ApplicationType
from .model import Application


class ApplicationRepository(Protocol):
    def create(self, *, user_id: int, pin: str, app_type: ApplicationType, payload: dict) -> int:
        raise NotImplementedError

    def get(self, application_id: int) -> Optional[Application]:
        raise NotImplementedError

    def list_applications(
        self,
        *,
        status: Optional[ApplicationStatus] = None,
        pin: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[Application]:
        """Newest first."""

        raise NotImplementedError

    def set_status(self, application_id: int, status: ApplicationStatus) -> bool:
        raise NotImplementedError
