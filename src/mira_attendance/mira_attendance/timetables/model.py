from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Timetable:
    timetable_id: int
    college_code: str
    branch: str
    year: int
    url: str
    updated_at: datetime
    updated_by: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.timetable_id),
            "college_code": self.college_code,
            "branch": self.branch,
            "year": self.year,
            "url": self.url,
            "updated_at": self.updated_at.isoformat(),
            "updated_by": self.updated_by,
        }
