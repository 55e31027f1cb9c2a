from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Optional

from ..core.enums import AttendanceStatus, LocationStatus


@dataclass(frozen=True)
class LocationInfo:
    status: Optional[LocationStatus] = None
    coordinates: Optional[str] = None
    distance_km: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value if self.status else None,
            "coordinates": self.coordinates,
            "distance_km": self.distance_km,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for one user on one day."""

    record_id: int
    user_id: int
    user_name: str
    user_pin: str
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[time] = None
    user_avatar: Optional[str] = None
    location: LocationInfo = field(default_factory=LocationInfo)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.record_id),
            "userId": str(self.user_id),
            "userName": self.user_name,
            "userPin": self.user_pin,
            "userAvatar": self.user_avatar,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "timestamp": self.check_in_time.strftime("%H:%M:%S") if self.check_in_time else None,
            "location": self.location.to_dict(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class NewAttendance:
    user_id: int
    user_name: str
    user_pin: str
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[time]
    user_avatar: Optional[str] = None
    location: LocationInfo = field(default_factory=LocationInfo)


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    present_today: int
    absent_today: int
    attendance_percentage: int

    def to_dict(self) -> dict[str, int]:
        return {
            "totalStudents": self.total_students,
            "presentToday": self.present_today,
            "absentToday": self.absent_today,
            "attendancePercentage": self.attendance_percentage,
        }
