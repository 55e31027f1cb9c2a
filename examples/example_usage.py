"""Using the service layer directly, without Flask.

Prints today's dashboard numbers as seen by the demo principal.
"""

import importlib

from config import get_settings_module

from src.mira_attendance.mira_attendance.common.auth import SessionUser
from src.mira_attendance.mira_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    principal = SessionUser.from_user(container.user_service.get_user_by_pin("PRI-210"))
    print(container.attendance_service.dashboard_stats(principal).to_dict())


if __name__ == "__main__":
    main()
