from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local
from ..common.tenancy import is_tenant_scoped
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import Timetable
from .repository import TimetableRepository

logger = logging.getLogger(__name__)


def _parse_year(value: Any) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("year must be a number")
    if year < 1:
        raise ValidationError("year must be a positive number")
    return year


class TimetableService:
    def __init__(self, timetables: TimetableRepository, *, clock: Callable[[], datetime] = now_local):
        self._timetables = timetables
        self._clock = clock

    def get(self, branch: str, year: Any, current_user) -> Optional[Timetable]:
        branch = require_non_empty(branch, "branch")
        college = current_user.college_code if is_tenant_scoped(current_user) else None
        return self._timetables.get(branch=branch, year=_parse_year(year), college_code=college)

    def set(self, branch: str, year: Any, url: str, current_user) -> Timetable:
        if not current_user.college_code:
            raise ValidationError("User has no college assigned.")
        branch = require_non_empty(branch, "branch")
        url = require_non_empty(url, "url")

        timetable = self._timetables.upsert(
            college_code=current_user.college_code,
            branch=branch,
            year=_parse_year(year),
            url=url,
            updated_at=self._clock(),
            updated_by=current_user.name,
        )
        logger.info("Timetable %s/%s year %s updated by %s", timetable.college_code, branch, timetable.year, current_user.pin)
        return timetable
