from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.tenancy import apply_tenant_filter, is_tenant_scoped
from ..common.validators import parse_enum, require_non_empty
from ..core.enums import MANAGEMENT_ROLES, ApplicationStatus, ApplicationType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Application
from .repository import ApplicationRepository

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(self, applications: ApplicationRepository, users: UserRepository):
        self._applications = applications
        self._users = users

    def submit(self, *, pin: str, app_type: Any, payload: Optional[Mapping[str, Any]] = None) -> Application:
        pin = require_non_empty(pin, "PIN")
        kind = parse_enum(ApplicationType, app_type, "application type")
        if payload is not None and not isinstance(payload, Mapping):
            raise ValidationError("payload must be an object")

        user = self._users.get_by_pin(pin)
        if not user:
            raise NotFoundError("User with given PIN not found.")

        application_id = self._applications.create(
            user_id=user.user_id,
            pin=user.pin,
            app_type=kind,
            payload=dict(payload or {}),
        )
        logger.info("Application %s (%s) submitted by %s", application_id, kind.value, user.pin)
        return self._get(application_id)

    def list_applications(self, current_user, *, status: Optional[str] = None) -> list[Application]:
        st = parse_enum(ApplicationStatus, status, "status") if status else None
        apps = self._applications.list_applications(status=st)
        if not is_tenant_scoped(current_user):
            return list(apps)
        colleges = {u.user_id: u.college_code for u in self._users.list_users(college_code=current_user.college_code)}
        return apply_tenant_filter(apps, current_user, lambda a: colleges.get(a.user_id))

    def list_by_pin(self, pin: str) -> list[Application]:
        return list(self._applications.list_applications(pin=pin))

    def list_by_user(self, user_id: int) -> list[Application]:
        return list(self._applications.list_applications(user_id=int(user_id)))

    def update_status(self, application_id: int, status: Any, current_user) -> Application:
        if current_user.role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You do not have permission to review applications")

        new_status = parse_enum(ApplicationStatus, status, "status")
        if new_status == ApplicationStatus.PENDING:
            raise ValidationError("An application can only be approved or rejected")

        app = self._get(application_id)
        owner = self._users.get_by_id(app.user_id)
        if is_tenant_scoped(current_user) and (not owner or owner.college_code != current_user.college_code):
            raise NotFoundError("Application not found")
        if app.status != ApplicationStatus.PENDING:
            raise ValidationError("Application has already been processed")

        if not self._applications.set_status(app.application_id, new_status):
            raise ValidationError("Application has already been processed")
        logger.info("Application %s %s by %s", app.application_id, new_status.value, current_user.pin)
        return self._get(application_id)

    def _get(self, application_id: int) -> Application:
        app = self._applications.get(int(application_id))
        if not app:
            raise NotFoundError("Application not found")
        return app
