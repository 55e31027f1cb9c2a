from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SubjectResult, SyllabusCoverage
from .repository import ResultsRepository, SyllabusRepository

_SYLLABUS_COLUMNS = (
    "coverage_id, college_code, branch, year, subject_code, subject_name, "
    "faculty_id, faculty_name, topics_completed, total_topics, last_updated"
)


def _row_to_coverage(r: dict) -> SyllabusCoverage:
    return SyllabusCoverage(
        coverage_id=int(r["coverage_id"]),
        branch=r["branch"],
        year=int(r["year"]),
        subject_code=r["subject_code"],
        subject_name=r["subject_name"],
        topics_completed=int(r["topics_completed"]),
        total_topics=int(r["total_topics"]),
        college_code=r.get("college_code"),
        faculty_id=int(r["faculty_id"]) if r.get("faculty_id") is not None else None,
        faculty_name=r.get("faculty_name"),
        last_updated=r.get("last_updated"),
    )


def _row_to_result(r: dict) -> SubjectResult:
    return SubjectResult(
        result_id=int(r["result_id"]),
        pin=r["pin"],
        semester=int(r["semester"]),
        subject_code=r["subject_code"],
        subject_name=r["subject_name"],
        internal_marks=int(r["internal_marks"]),
        external_marks=int(r["external_marks"]),
        total_marks=int(r["total_marks"]),
        grade=r.get("grade"),
    )


class MySQLSyllabusRepository(SyllabusRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_coverage(
        self,
        *,
        college_code: Optional[str] = None,
        branch: Optional[str] = None,
        year: Optional[int] = None,
    ) -> Sequence[SyllabusCoverage]:
        where = []
        params: list[Any] = []
        if college_code:
            where.append("college_code=%s")
            params.append(college_code)
        if branch:
            where.append("branch=%s")
            params.append(branch)
        if year is not None:
            where.append("year=%s")
            params.append(int(year))

        sql = f"SELECT {_SYLLABUS_COLUMNS} FROM syllabus_coverage"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY branch, year, subject_code"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_coverage(r) for r in fetchall(cur)]

    def get(self, coverage_id: int) -> Optional[SyllabusCoverage]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SYLLABUS_COLUMNS} FROM syllabus_coverage WHERE coverage_id=%s", (int(coverage_id),))
            r = fetchone(cur)
            return _row_to_coverage(r) if r else None

    def update_progress(
        self,
        coverage_id: int,
        *,
        topics_completed: int,
        total_topics: int,
        last_updated: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE syllabus_coverage
                SET topics_completed=%s, total_topics=%s, last_updated=%s
                WHERE coverage_id=%s
                """,
                (int(topics_completed), int(total_topics), last_updated, int(coverage_id)),
            )


class MySQLResultsRepository(ResultsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_pin(self, pin: str) -> Sequence[SubjectResult]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT result_id, pin, semester, subject_code, subject_name,
                       internal_marks, external_marks, total_marks, grade
                FROM sbtet_results
                WHERE pin=%s
                ORDER BY semester, subject_code
                """,
                (pin,),
            )
            return [_row_to_result(r) for r in fetchall(cur)]
