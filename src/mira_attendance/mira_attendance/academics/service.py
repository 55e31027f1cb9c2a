from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local
from ..common.tenancy import can_see, is_tenant_scoped
from ..core.exceptions import NotFoundError, ValidationError
from .model import SubjectResult, SyllabusCoverage
from .repository import ResultsRepository, SyllabusRepository

logger = logging.getLogger(__name__)


def _non_negative_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


class SyllabusService:
    def __init__(self, syllabus: SyllabusRepository, *, clock: Callable[[], datetime] = now_local):
        self._syllabus = syllabus
        self._clock = clock

    def list_coverage(
        self,
        current_user,
        *,
        branch: Optional[str] = None,
        year: Any = None,
    ) -> list[SyllabusCoverage]:
        college = current_user.college_code if is_tenant_scoped(current_user) else None
        year_value = _non_negative_int(year, "year") if year not in (None, "") else None
        return list(self._syllabus.list_coverage(college_code=college, branch=branch or None, year=year_value))

    def update(self, coverage_id: int, current_user, *, topics_completed: Any = None, total_topics: Any = None) -> SyllabusCoverage:
        current = self._syllabus.get(int(coverage_id))
        if not current or not can_see(current_user, current.college_code):
            raise NotFoundError("Syllabus entry not found")

        if topics_completed is None and total_topics is None:
            raise ValidationError("topicsCompleted or totalTopics is required")
        completed = (
            _non_negative_int(topics_completed, "topicsCompleted")
            if topics_completed is not None
            else current.topics_completed
        )
        total = _non_negative_int(total_topics, "totalTopics") if total_topics is not None else current.total_topics
        if completed > total:
            raise ValidationError("Completed topics cannot exceed total topics")

        self._syllabus.update_progress(
            current.coverage_id,
            topics_completed=completed,
            total_topics=total,
            last_updated=self._clock(),
        )
        logger.info("Syllabus %s at %s/%s by %s", current.subject_code, completed, total, current_user.pin)
        return self._syllabus.get(current.coverage_id)


class ResultsService:
    def __init__(self, results: ResultsRepository):
        self._results = results

    def results_for_pin(self, pin: str) -> list[SubjectResult]:
        return sorted(self._results.list_for_pin(pin), key=lambda r: (r.semester, r.subject_code))
