import os

from config.config import *  # noqa: F401,F403
from config.config import Config, _flag

SECRET_KEY = Config.SECRET_KEY or "dev-secret-key"

DEBUG = True
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "1")
# Optional: also seed demo data on startup
AUTO_SEED_DB = Config.AUTO_SEED_DB
