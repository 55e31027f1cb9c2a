from __future__ import annotations

from datetime import datetime

import pytest

from src.mira_attendance.mira_attendance.academics.model import SubjectResult, SyllabusCoverage
from src.mira_attendance.mira_attendance.academics.service import ResultsService, SyllabusService
from src.mira_attendance.mira_attendance.common.auth import SessionUser
from src.mira_attendance.mira_attendance.core.enums import Role
from src.mira_attendance.mira_attendance.core.exceptions import NotFoundError, ValidationError
from src.mira_attendance.mira_attendance.todos.service import TodoService
from tests.fakes import InMemoryResults, InMemorySyllabus, InMemoryTodos, make_user

FACULTY = SessionUser.from_user(make_user(3, "FAC-210-01", Role.FACULTY))


# ---- todos ----------------------------------------------------------------

def test_todo_lifecycle(fixed_now):
    svc = TodoService(InMemoryTodos(), clock=lambda: fixed_now)

    first = svc.add(7, "Prepare unit test")
    second = svc.add(7, "  Grade lab records ")
    assert second.text == "Grade lab records"
    assert [t.todo_id for t in svc.list_todos(7)] == [second.todo_id, first.todo_id]

    assert svc.toggle(7, first.todo_id).completed is True
    assert svc.update(7, first.todo_id, {"text": "Prepare unit test 2"}).text == "Prepare unit test 2"

    svc.delete(7, second.todo_id)
    assert [t.todo_id for t in svc.list_todos(7)] == [first.todo_id]


def test_todo_text_required():
    with pytest.raises(ValidationError):
        TodoService(InMemoryTodos()).add(7, "")


def test_todos_are_private(fixed_now):
    svc = TodoService(InMemoryTodos(), clock=lambda: fixed_now)
    mine = svc.add(7, "Mine")

    assert svc.list_todos(8) == []
    with pytest.raises(NotFoundError):
        svc.toggle(8, mine.todo_id)
    with pytest.raises(NotFoundError):
        svc.delete(8, mine.todo_id)


# ---- syllabus -------------------------------------------------------------

def _coverage(coverage_id, college="210", completed=4, total=12):
    return SyllabusCoverage(
        coverage_id=coverage_id,
        branch="CS",
        year=1,
        subject_code=f"CS-10{coverage_id}",
        subject_name="Programming in C",
        topics_completed=completed,
        total_topics=total,
        college_code=college,
    )


def test_syllabus_list_is_tenant_filtered():
    svc = SyllabusService(InMemorySyllabus(_coverage(1), _coverage(2, college="999")))

    assert [s.coverage_id for s in svc.list_coverage(FACULTY)] == [1]
    assert svc.list_coverage(FACULTY, branch="EC") == []


def test_syllabus_update_stamps_last_updated(fixed_now):
    svc = SyllabusService(InMemorySyllabus(_coverage(1)), clock=lambda: fixed_now)

    item = svc.update(1, FACULTY, topics_completed=6)

    assert item.topics_completed == 6
    assert item.total_topics == 12
    assert item.last_updated == fixed_now
    assert item.to_dict()["percentage"] == 50


def test_syllabus_completed_cannot_exceed_total():
    svc = SyllabusService(InMemorySyllabus(_coverage(1)), clock=lambda: datetime(2025, 1, 1))

    with pytest.raises(ValidationError):
        svc.update(1, FACULTY, topics_completed=13)
    with pytest.raises(ValidationError):
        svc.update(1, FACULTY, topics_completed=5, total_topics=4)
    with pytest.raises(ValidationError):
        svc.update(1, FACULTY, topics_completed=-1)


def test_syllabus_total_only_update_keeps_completed(fixed_now):
    svc = SyllabusService(InMemorySyllabus(_coverage(1)), clock=lambda: fixed_now)

    item = svc.update(1, FACULTY, total_topics=20)

    assert (item.topics_completed, item.total_topics) == (4, 20)
    assert item.to_dict()["percentage"] == 20
    with pytest.raises(ValidationError):
        svc.update(1, FACULTY, total_topics=3)
    with pytest.raises(ValidationError):
        svc.update(1, FACULTY)


def test_syllabus_of_other_college_is_not_found():
    svc = SyllabusService(InMemorySyllabus(_coverage(2, college="999")))

    with pytest.raises(NotFoundError):
        svc.update(2, FACULTY, topics_completed=1)


# ---- results --------------------------------------------------------------

def test_results_sorted_by_semester():
    def result(rid, semester, code):
        return SubjectResult(rid, "23210-CS-001", semester, code, code, 20, 50, 70, "B")

    svc = ResultsService(InMemoryResults(result(1, 3, "CS-301"), result(2, 1, "CS-102"), result(3, 1, "CS-101")))

    assert [(r.semester, r.subject_code) for r in svc.results_for_pin("23210-CS-001")] == [
        (1, "CS-101"),
        (1, "CS-102"),
        (3, "CS-301"),
    ]
    assert svc.results_for_pin("OTHER") == []
