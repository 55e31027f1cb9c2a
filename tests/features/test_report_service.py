from __future__ import annotations

import io
from datetime import date, time

import pandas as pd
import pytest

from src.mira_attendance.mira_attendance.attendance.model import LocationInfo, NewAttendance
from src.mira_attendance.mira_attendance.common.auth import SessionUser
from src.mira_attendance.mira_attendance.core.enums import AttendanceStatus, LocationStatus
from src.mira_attendance.mira_attendance.core.exceptions import ValidationError
from src.mira_attendance.mira_attendance.reports.export import report_to_csv, report_to_xlsx
from src.mira_attendance.mira_attendance.reports.service import AttendanceReportService
from tests.fakes import InMemoryAttendance, InMemoryUsers


def _mark(repo, user, day, *, on_campus=True, status=AttendanceStatus.PRESENT):
    repo.create(
        NewAttendance(
            user_id=user.user_id,
            user_name=user.name,
            user_pin=user.pin,
            work_date=day,
            status=status,
            check_in_time=time(9, 0),
            location=LocationInfo(
                status=LocationStatus.ON_CAMPUS if on_campus else LocationStatus.OFF_CAMPUS,
                coordinates="18.4550, 79.5217",
                distance_km=0.01 if on_campus else 3.2,
            ),
        )
    )


@pytest.fixture
def setup(users):
    users_repo = InMemoryUsers(*users)
    attendance = InMemoryAttendance()
    asha = users_repo.get_by_pin("23210-CS-001")
    ravi = users_repo.get_by_pin("23210-CS-002")
    outsider = users_repo.get_by_pin("23999-EC-001")

    _mark(attendance, asha, date(2025, 3, 3))
    _mark(attendance, asha, date(2025, 3, 4), on_campus=False)
    _mark(attendance, ravi, date(2025, 3, 4))
    _mark(attendance, outsider, date(2025, 3, 4))
    _mark(attendance, asha, date(2025, 3, 20))

    principal = SessionUser.from_user(users_repo.get_by_pin("PRI-210"))
    return AttendanceReportService(attendance, users_repo), principal


def test_report_rows_and_summary(setup):
    svc, principal = setup

    data = svc.build_attendance_report(start=date(2025, 3, 3), end=date(2025, 3, 6), current_user=principal)

    assert [(r["date"], r["pin"]) for r in data.rows] == [
        ("2025-03-03", "23210-CS-001"),
        ("2025-03-04", "23210-CS-001"),
        ("2025-03-04", "23210-CS-002"),
    ]
    assert data.rows[1]["location_status"] == "Off-Campus"
    assert data.rows[0]["timestamp"] == "09:00:00"

    summary = {s["pin"]: s for s in data.summary}
    assert set(summary) == {"23210-CS-001", "23210-CS-002"}
    assert summary["23210-CS-001"]["present_days"] == 2
    assert summary["23210-CS-001"]["on_campus_days"] == 1
    assert summary["23210-CS-001"]["total_days"] == 4
    assert summary["23210-CS-001"]["percentage"] == 50
    assert summary["23210-CS-002"]["percentage"] == 25
    assert data.summary[0]["pin"] == "23210-CS-001"


def test_staff_check_ins_are_rows_but_not_summarised(users):
    users_repo = InMemoryUsers(*users)
    attendance = InMemoryAttendance()
    _mark(attendance, users_repo.get_by_pin("FAC-210-01"), date(2025, 3, 5))
    svc = AttendanceReportService(attendance, users_repo)
    principal = SessionUser.from_user(users_repo.get_by_pin("PRI-210"))

    data = svc.build_attendance_report(start=date(2025, 3, 5), end=date(2025, 3, 5), current_user=principal)

    assert [r["pin"] for r in data.rows] == ["FAC-210-01"]
    assert {s["pin"] for s in data.summary} == {"23210-CS-001", "23210-CS-002"}
    assert all(s["present_days"] == 0 for s in data.summary)


def test_default_range_follows_the_clock(fixed_now):
    svc = AttendanceReportService(InMemoryAttendance(), InMemoryUsers(), clock=lambda: fixed_now)

    assert svc.default_range() == (date(2025, 3, 1), date(2025, 3, 10))


def test_report_branch_filter(setup):
    svc, principal = setup

    data = svc.build_attendance_report(
        start=date(2025, 3, 1), end=date(2025, 3, 31), current_user=principal, branch="EC"
    )

    assert data.rows == []
    assert data.summary == []


def test_report_rejects_inverted_range(setup):
    svc, principal = setup

    with pytest.raises(ValidationError):
        svc.build_attendance_report(start=date(2025, 3, 6), end=date(2025, 3, 3), current_user=principal)


def test_csv_export_has_bom_and_header(setup):
    svc, principal = setup
    data = svc.build_attendance_report(start=date(2025, 3, 3), end=date(2025, 3, 3), current_user=principal)

    body = report_to_csv(data)

    assert body.startswith(b"\xef\xbb\xbf")
    lines = body.decode("utf-8-sig").splitlines()
    assert lines[0] == "date,pin,name,branch,timestamp,status,location_status,distance_km"
    assert lines[1].startswith("2025-03-03,23210-CS-001,Asha,CS,09:00:00,Present,On-Campus")


def test_xlsx_export_has_rows_and_summary_sheets(setup):
    svc, principal = setup
    data = svc.build_attendance_report(start=date(2025, 3, 3), end=date(2025, 3, 6), current_user=principal)

    sheets = pd.read_excel(io.BytesIO(report_to_xlsx(data)), sheet_name=None)

    assert list(sheets) == ["Attendance", "Summary"]
    assert len(sheets["Attendance"]) == 3
    assert set(sheets["Summary"]["pin"]) == {"23210-CS-001", "23210-CS-002"}
