from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    SUPER_ADMIN = "SUPER_ADMIN"
    PRINCIPAL = "PRINCIPAL"
    HOD = "HOD"
    FACULTY = "FACULTY"
    STAFF = "STAFF"
    STUDENT = "STUDENT"


MANAGEMENT_ROLES = frozenset({Role.SUPER_ADMIN, Role.PRINCIPAL, Role.HOD})
TEACHING_ROLES = frozenset({Role.FACULTY, Role.PRINCIPAL, Role.HOD})


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


class LocationStatus(str, Enum):
    ON_CAMPUS = "On-Campus"
    OFF_CAMPUS = "Off-Campus"


class FaceQuality(str, Enum):
    GOOD = "GOOD"
    POOR = "POOR"


class ApplicationType(str, Enum):
    LEAVE = "LEAVE"
    BONAFIDE = "BONAFIDE"
    TC = "TC"


class ApplicationStatus(str, Enum):
    """Approval workflow state of a student application."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class FeedbackType(str, Enum):
    SUGGESTION = "Suggestion"
    COMPLAINT = "Complaint"
    PRAISE = "Praise"


class FeedbackStatus(str, Enum):
    NEW = "New"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
