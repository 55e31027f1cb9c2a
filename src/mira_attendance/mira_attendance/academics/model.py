from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class SyllabusCoverage:
    """Progress of one subject for a branch/year."""

    coverage_id: int
    branch: str
    year: int
    subject_code: str
    subject_name: str
    topics_completed: int
    total_topics: int
    college_code: Optional[str] = None
    faculty_id: Optional[int] = None
    faculty_name: Optional[str] = None
    last_updated: Optional[datetime] = None

    @property
    def percentage(self) -> int:
        if self.total_topics <= 0:
            return 0
        return int(self.topics_completed * 100 / self.total_topics + 0.5)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.coverage_id),
            "branch": self.branch,
            "year": self.year,
            "subjectCode": self.subject_code,
            "subjectName": self.subject_name,
            "facultyId": str(self.faculty_id) if self.faculty_id is not None else None,
            "facultyName": self.faculty_name,
            "topicsCompleted": self.topics_completed,
            "totalTopics": self.total_topics,
            "percentage": self.percentage,
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
        }


@dataclass(frozen=True)
class SubjectResult:
    """One subject line of a state board (SBTET) semester result."""

    result_id: int
    pin: str
    semester: int
    subject_code: str
    subject_name: str
    internal_marks: int
    external_marks: int
    total_marks: int
    grade: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.result_id),
            "pin": self.pin,
            "semester": self.semester,
            "subjectCode": self.subject_code,
            "subjectName": self.subject_name,
            "internal": self.internal_marks,
            "external": self.external_marks,
            "total": self.total_marks,
            "grade": self.grade,
        }
