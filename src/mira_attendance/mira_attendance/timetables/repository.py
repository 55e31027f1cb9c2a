from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Timetable


class TimetableRepository(Protocol):
    def get(self, *, branch: str, year: int, college_code: Optional[str] = None) -> Optional[Timetable]:
        """Without a college code the most recently updated match is returned."""

        raise NotImplementedError

    def upsert(
        self,
        *,
        college_code: str,
        branch: str,
        year: int,
        url: str,
        updated_at: datetime,
        updated_by: str,
    ) -> Timetable:
        raise NotImplementedError
