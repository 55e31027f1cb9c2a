from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    def get(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_pin_and_date(self, user_pin: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        user_pin: Optional[str] = None,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: NewAttendance) -> int:
        """Insert a record; raises ConflictError when (user_pin, date) already exists."""

        raise NotImplementedError

    def update(self, record_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError
