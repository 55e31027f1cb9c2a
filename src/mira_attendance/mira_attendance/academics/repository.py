from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import SubjectResult, SyllabusCoverage


class SyllabusRepository(Protocol):
    def list_coverage(
        self,
        *,
        college_code: Optional[str] = None,
        branch: Optional[str] = None,
        year: Optional[int] = None,
    ) -> Sequence[SyllabusCoverage]:
        raise NotImplementedError

    def get(self, coverage_id: int) -> Optional[SyllabusCoverage]:
        raise NotImplementedError

    def update_progress(
        self,
        coverage_id: int,
        *,
        topics_completed: int,
        total_topics: int,
        last_updated: datetime,
    ) -> None:
        raise NotImplementedError


class ResultsRepository(Protocol):
    def list_for_pin(self, pin: str) -> Sequence[SubjectResult]:
        raise NotImplementedError
