from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.tenancy import apply_tenant_filter, is_tenant_scoped
from ..common.validators import parse_enum, require_fields
from ..core.constants import AVATAR_URL_TEMPLATE
from ..core.enums import MANAGEMENT_ROLES, AttendanceStatus, LocationStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .factory import CheckinStrategyFactory
from .geofence import Coordinates
from .model import AttendanceRecord, DashboardStats, LocationInfo, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# Roles allowed to read other people's attendance.
_READ_ALL_ROLES = MANAGEMENT_ROLES | {Role.FACULTY}


def avatar_for(name: str) -> str:
    return AVATAR_URL_TEMPLATE.format(seed=quote(name or "", safe=""))


def _parse_time(value: Any) -> Optional[time]:
    if value in (None, ""):
        return None
    if isinstance(value, time):
        return value
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(str(value), fmt).time()
        except ValueError:
            continue
    raise ValidationError("Time must be HH:MM or HH:MM:SS")


def _parse_date(value: Any, field_name: str = "date") -> Optional[date]:
    if value in (None, ""):
        return None
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field_name} (expected YYYY-MM-DD)")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: CheckinStrategyFactory,
        face_verifier=None,
        require_face_verification: bool = False,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory
        self._face_verifier = face_verifier
        self._require_face = bool(require_face_verification)
        self._clock = clock

    # ---- check-in ----------------------------------------------------
    def mark_attendance(
        self,
        user_id: int,
        coordinates: Optional[Coordinates],
        *,
        live_image: Optional[str] = None,
    ) -> AttendanceRecord:
        now = self._clock()
        today = now.date()

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if user.access_revoked:
            raise AuthorizationError("Access revoked for this user.")

        if self._attendance.get_for_pin_and_date(user.pin, today):
            raise ConflictError("Already marked")

        geofence = self._factory.geofence
        strategy = self._factory.for_location(coordinates)
        decision = strategy.decide(coordinates=coordinates, geofence=geofence)
        if not decision.allowed:
            logger.info("Check-in rejected for %s: %s", user.pin, decision.reason)
            raise ValidationError(decision.reason or "Check-in is not allowed from this location")

        self._verify_face(user, live_image)

        record_id = self._attendance.create(
            NewAttendance(
                user_id=user.user_id,
                user_name=user.name,
                user_pin=user.pin,
                user_avatar=user.image_url or avatar_for(user.name),
                work_date=today,
                status=AttendanceStatus.PRESENT,
                check_in_time=now.time().replace(microsecond=0),
                location=LocationInfo(
                    status=decision.location_status,
                    coordinates=decision.coordinates,
                    distance_km=decision.distance_km,
                ),
            )
        )
        logger.info("Attendance marked for %s (%s)", user.pin, decision.location_status.value)
        return self._get(record_id)

    def _verify_face(self, user, live_image: Optional[str]) -> None:
        if live_image is not None and not isinstance(live_image, str):
            raise ValidationError("image must be a data URL or an http(s) URL")
        if not live_image:
            if self._require_face:
                raise ValidationError("A live photo is required to mark attendance")
            return

        if not user.reference_image_url:
            if self._require_face:
                raise ValidationError("No reference photo on file. Please contact your administrator.")
            return

        if self._face_verifier is None:
            return

        result = self._face_verifier.verify(user.reference_image_url, live_image)
        if not result.passed:
            logger.info("Face verification failed for %s: %s", user.pin, result.reason)
            raise ValidationError(result.reason or "Faces do not match")

    # ---- raw record CRUD ---------------------------------------------
    def create_record(self, data: Mapping[str, Any]) -> AttendanceRecord:
        require_fields(data, ("date", "userId", "userName", "userPin"))

        location = data.get("location") or {}
        try:
            user_id = int(data["userId"])
        except (TypeError, ValueError):
            raise ValidationError("userId must be a number")

        record_id = self._attendance.create(
            NewAttendance(
                user_id=user_id,
                user_name=str(data["userName"]),
                user_pin=str(data["userPin"]),
                user_avatar=data.get("userAvatar"),
                work_date=_parse_date(data["date"]),
                status=parse_enum(AttendanceStatus, data.get("status") or AttendanceStatus.PRESENT.value, "status"),
                check_in_time=self._clock().time().replace(microsecond=0),
                location=self._location_from(location),
            )
        )
        return self._get(record_id)

    def update_record(self, record_id: int, data: Mapping[str, Any]) -> AttendanceRecord:
        self._get(record_id)

        changes: dict[str, Any] = {}
        if "status" in data:
            changes["status"] = parse_enum(AttendanceStatus, data["status"], "status")
        if "timestamp" in data:
            changes["check_in_time"] = _parse_time(data["timestamp"])
        if "date" in data:
            changes["work_date"] = _parse_date(data["date"])
        if "userName" in data:
            changes["user_name"] = str(data["userName"])
        if "userAvatar" in data:
            changes["user_avatar"] = data["userAvatar"]
        if "location" in data:
            loc = self._location_from(data["location"] or {})
            changes["location_status"] = loc.status
            changes["coordinates"] = loc.coordinates
            changes["distance_km"] = loc.distance_km

        if changes:
            self._attendance.update(int(record_id), changes)
        return self._get(record_id)

    def delete_record(self, record_id: int) -> AttendanceRecord:
        record = self._get(record_id)
        if not self._attendance.delete(int(record_id)):
            raise NotFoundError("Not found")
        return record

    @staticmethod
    def _location_from(location: Mapping[str, Any]) -> LocationInfo:
        status = location.get("status")
        distance = location.get("distance_km")
        try:
            distance = float(distance) if distance is not None else None
        except (TypeError, ValueError):
            raise ValidationError("distance_km must be a number")
        return LocationInfo(
            status=parse_enum(LocationStatus, status, "location status") if status else None,
            coordinates=location.get("coordinates"),
            distance_km=distance,
        )

    def _get(self, record_id: int) -> AttendanceRecord:
        record = self._attendance.get(int(record_id))
        if not record:
            raise NotFoundError("Not found")
        return record

    # ---- queries -----------------------------------------------------
    def list_records(
        self,
        current_user,
        *,
        work_date: Optional[str] = None,
        user_pin: Optional[str] = None,
        user_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[AttendanceRecord]:
        if current_user.role not in _READ_ALL_ROLES:
            user_id = current_user.user_id
            user_pin = None

        start = _parse_date(start_date, "startDate")
        end = _parse_date(end_date, "endDate")
        if start and end and start > end:
            raise ValidationError("startDate must not be after endDate")

        records = self._attendance.list_records(
            work_date=_parse_date(work_date),
            user_pin=user_pin,
            user_id=int(user_id) if user_id is not None else None,
            start_date=start,
            end_date=end,
        )
        return self._tenant_filter(records, current_user)

    def _tenant_filter(self, records, current_user) -> list[AttendanceRecord]:
        if not is_tenant_scoped(current_user):
            return list(records)
        colleges = {u.user_id: u.college_code for u in self._users.list_users(college_code=current_user.college_code)}
        return apply_tenant_filter(records, current_user, lambda r: colleges.get(r.user_id))

    def records_for_user(self, user_id: int) -> list[AttendanceRecord]:
        return list(self._attendance.list_records(user_id=int(user_id)))

    def todays_record_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        records = self._attendance.list_records(user_id=int(user_id), work_date=self._clock().date())
        return records[0] if records else None

    def records_for_pin(self, pin: str) -> list[AttendanceRecord]:
        student = self._users.get_by_pin(pin)
        if not student or student.role != Role.STUDENT:
            return []
        return self.records_for_user(student.user_id)

    def dashboard_stats(self, current_user) -> DashboardStats:
        today = self._clock().date()
        college = current_user.college_code if is_tenant_scoped(current_user) else None
        students = self._users.list_users(role=Role.STUDENT, college_code=college)
        student_ids = {u.user_id for u in apply_tenant_filter(students, current_user, lambda u: u.college_code)}

        present = {
            r.user_id
            for r in self._attendance.list_records(work_date=today)
            if r.status == AttendanceStatus.PRESENT and r.user_id in student_ids
        }

        total = len(student_ids)
        present_count = len(present)
        # half-up rounding
        percentage = int(present_count * 100 / total + 0.5) if total > 0 else 0
        return DashboardStats(
            total_students=total,
            present_today=present_count,
            absent_today=total - present_count,
            attendance_percentage=percentage,
        )
