"""Load demo syllabus/results rows and (re)create the demo accounts."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.mira_attendance.mira_attendance.core.logging_config import configure_logging
from src.mira_attendance.mira_attendance.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    print(f"OK: seeded {db_config.get('database')} on {db_config.get('host')}")
    print("Demo accounts (pin / password / role):")
    for pin, _, role, _, _, _, _, password in DEMO_USERS:
        print(f"  {pin:<14} {password:<13} {role}")


if __name__ == "__main__":
    main()
