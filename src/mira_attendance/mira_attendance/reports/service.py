from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.tenancy import apply_tenant_filter, is_tenant_scoped
from ..core.enums import AttendanceStatus, LocationStatus, Role
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository

ROW_FIELDS = ["date", "pin", "name", "branch", "timestamp", "status", "location_status", "distance_km"]
SUMMARY_FIELDS = ["pin", "name", "branch", "present_days", "on_campus_days", "total_days", "percentage"]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._users = users
        self._clock = clock

    def default_range(self) -> tuple[date, date]:
        """First day of the current month through today."""
        today = self._clock().date()
        return today.replace(day=1), today

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        current_user,
        branch: Optional[str] = None,
    ) -> ReportData:
        """Daily rows for everyone in scope plus a per-student summary.

        Every student in scope appears in the summary, including those
        without a single record in the range. Staff check-ins show up as
        rows only.
        """

        if start > end:
            raise ValidationError("start must not be after end")

        college = current_user.college_code if is_tenant_scoped(current_user) else None
        people = apply_tenant_filter(self._users.list_users(college_code=college), current_user, lambda u: u.college_code)
        if branch:
            people = [u for u in people if u.branch == branch]
        by_id = {u.user_id: u for u in people}

        records = [
            r
            for r in self._attendance.list_records(start_date=start, end_date=end)
            if r.user_id in by_id
        ]
        records.sort(key=lambda r: (r.work_date, r.user_pin))

        summary_map: dict[int, dict] = {}
        for u in people:
            if u.role == Role.STUDENT:
                summary_map[u.user_id] = self._summary_entry(u)

        out_rows: list[dict] = []
        for r in records:
            user = by_id[r.user_id]
            out_rows.append(
                {
                    "date": r.work_date.strftime("%Y-%m-%d"),
                    "pin": r.user_pin,
                    "name": r.user_name,
                    "branch": user.branch,
                    "timestamp": r.check_in_time.strftime("%H:%M:%S") if r.check_in_time else "-",
                    "status": r.status.value,
                    "location_status": r.location.status.value if r.location.status else "-",
                    "distance_km": r.location.distance_km if r.location.distance_km is not None else "",
                }
            )

            s = summary_map.get(r.user_id)
            if s is not None and r.status == AttendanceStatus.PRESENT:
                s["present_days"] += 1
                if r.location.status == LocationStatus.ON_CAMPUS:
                    s["on_campus_days"] += 1

        total_days = (end - start).days + 1
        summary = []
        for s in summary_map.values():
            s["total_days"] = total_days
            s["percentage"] = int(s["present_days"] * 100 / total_days + 0.5)
            summary.append(s)

        summary.sort(key=lambda x: (-x["percentage"], x["pin"]))
        return ReportData(rows=out_rows, summary=summary)

    @staticmethod
    def _summary_entry(user) -> dict:
        return {
            "pin": user.pin,
            "name": user.name,
            "branch": user.branch,
            "present_days": 0,
            "on_campus_days": 0,
        }
