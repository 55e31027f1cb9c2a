"""Create the Mira Attendance tables (idempotent)."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.mira_attendance.mira_attendance.core.logging_config import configure_logging
from src.mira_attendance.mira_attendance.database.bootstrap import apply_schema, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = sorted(list_tables(db_config))
    print(
        f"OK: schema.sql -> {db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/"
        f"{db_config.get('database')}"
    )
    for name in tables:
        print(f"  - {name}")


if __name__ == "__main__":
    main()
