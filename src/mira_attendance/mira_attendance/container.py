from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from .academics.mysql_academics_repository import MySQLResultsRepository, MySQLSyllabusRepository
from .academics.repository import ResultsRepository, SyllabusRepository
from .academics.service import ResultsService, SyllabusService
from .ai.client import AIClient
from .ai.face_verification import FaceVerifier
from .ai.service import CogniCraftService
from .applications.mysql_application_repository import MySQLApplicationRepository
from .applications.repository import ApplicationRepository
from .applications.service import ApplicationService
from .attendance.factory import CheckinStrategyFactory
from .attendance.geofence import Geofence
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.repository import FeedbackRepository
from .feedback.service import FeedbackService
from .notifications.email_service import EmailConfig, EmailService
from .reports.service import AttendanceReportService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .timetables.mysql_timetable_repository import MySQLTimetableRepository
from .timetables.repository import TimetableRepository
from .timetables.service import TimetableService
from .todos.mysql_todo_repository import MySQLTodoRepository
from .todos.repository import TodoRepository
from .todos.service import TodoService
from .users.mysql_user_repository import MySQLOtpRepository, MySQLUserRepository
from .users.repository import OtpRepository, UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    otps: OtpRepository
    attendance: AttendanceRepository
    applications: ApplicationRepository
    timetables: TimetableRepository
    feedback: FeedbackRepository
    settings: SettingsRepository
    todos: TodoRepository
    syllabus: SyllabusRepository
    results: ResultsRepository


@dataclass(frozen=True)
class Container:
    repos: Repositories

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    application_service: ApplicationService
    timetable_service: TimetableService
    feedback_service: FeedbackService
    settings_service: SettingsService
    todo_service: TodoService
    syllabus_service: SyllabusService
    results_service: ResultsService
    report_service: AttendanceReportService
    email_service: EmailService
    ai_service: CogniCraftService

    conn: Optional[DatabaseConnection] = None


def _setting(settings: Any, name: str, default: Any) -> Any:
    value = getattr(settings, name, None) if settings is not None else None
    return default if value is None else value


def assemble_container(
    repos: Repositories,
    *,
    settings: Any = None,
    ai_client: Optional[AIClient] = None,
    email_service: Optional[EmailService] = None,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories.

    `settings` is any object exposing the settings-module attributes; missing
    values fall back to the built-in defaults.
    """

    if email_service is None:
        email_service = EmailService(
            EmailConfig(
                username=_setting(settings, "EMAIL_USER", None),
                password=_setting(settings, "EMAIL_PASS", None),
                smtp_server=_setting(settings, "SMTP_HOST", "smtp.gmail.com"),
                smtp_port=int(_setting(settings, "SMTP_PORT", 587)),
                sender_name=_setting(settings, "EMAIL_SENDER_NAME", "Mira Attendance"),
            )
        )

    if ai_client is None:
        ai_client = AIClient(
            _setting(settings, "GEMINI_API_KEY", None),
            default_model=_setting(settings, "AI_DEFAULT_MODEL", constants.DEFAULT_AI_MODEL),
            fast_model=_setting(settings, "AI_FAST_MODEL", constants.DEFAULT_AI_FAST_MODEL),
            pro_model=_setting(settings, "AI_PRO_MODEL", constants.DEFAULT_AI_PRO_MODEL),
        )

    geofence = Geofence(
        latitude=float(_setting(settings, "CAMPUS_LAT", constants.DEFAULT_CAMPUS_LAT)),
        longitude=float(_setting(settings, "CAMPUS_LON", constants.DEFAULT_CAMPUS_LON)),
        radius_km=float(_setting(settings, "CAMPUS_RADIUS_KM", constants.DEFAULT_CAMPUS_RADIUS_KM)),
    )

    auth_service = AuthService(
        repos.users,
        repos.otps,
        email_service,
        otp_ttl_minutes=int(_setting(settings, "OTP_TTL_MINUTES", constants.DEFAULT_OTP_TTL_MINUTES)),
        otp_fallback_email=_setting(settings, "OTP_FALLBACK_EMAIL", None),
        log_otp_codes=bool(_setting(settings, "DEBUG", False)),
        clock=clock,
    )
    attendance_service = AttendanceService(
        repos.attendance,
        repos.users,
        strategy_factory=CheckinStrategyFactory(
            geofence,
            require_on_campus=bool(_setting(settings, "REQUIRE_ON_CAMPUS", True)),
        ),
        face_verifier=FaceVerifier(ai_client),
        require_face_verification=bool(_setting(settings, "REQUIRE_FACE_VERIFICATION", False)),
        clock=clock,
    )

    return Container(
        repos=repos,
        auth_service=auth_service,
        user_service=UserService(repos.users),
        attendance_service=attendance_service,
        application_service=ApplicationService(repos.applications, repos.users),
        timetable_service=TimetableService(repos.timetables, clock=clock),
        feedback_service=FeedbackService(repos.feedback, clock=clock),
        settings_service=SettingsService(repos.settings),
        todo_service=TodoService(repos.todos, clock=clock),
        syllabus_service=SyllabusService(repos.syllabus, clock=clock),
        results_service=ResultsService(repos.results),
        report_service=AttendanceReportService(repos.attendance, repos.users, clock=clock),
        email_service=email_service,
        ai_service=CogniCraftService(ai_client),
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    repos = Repositories(
        users=MySQLUserRepository(conn),
        otps=MySQLOtpRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        applications=MySQLApplicationRepository(conn),
        timetables=MySQLTimetableRepository(conn),
        feedback=MySQLFeedbackRepository(conn),
        settings=MySQLSettingsRepository(conn),
        todos=MySQLTodoRepository(conn),
        syllabus=MySQLSyllabusRepository(conn),
        results=MySQLResultsRepository(conn),
    )
    return assemble_container(repos, settings=settings, conn=conn)
