from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Tests never talk to an external provider or SMTP server.
GEMINI_API_KEY = None
EMAIL_USER = None
EMAIL_PASS = None
REQUIRE_FACE_VERIFICATION = False

AUTO_INIT_DB = False
AUTO_SEED_DB = False
