"""Settings shared by every environment, read from environment variables."""

import os


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "mira_attendance")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    SESSION_DAYS = int(os.environ.get("SESSION_DAYS", "7"))

    # Campus geofence
    CAMPUS_LAT = float(os.environ.get("CAMPUS_LAT", "18.4550"))
    CAMPUS_LON = float(os.environ.get("CAMPUS_LON", "79.5217"))
    CAMPUS_RADIUS_KM = float(os.environ.get("CAMPUS_RADIUS_KM", "0.5"))
    REQUIRE_ON_CAMPUS = _flag("REQUIRE_ON_CAMPUS", "1")
    REQUIRE_FACE_VERIFICATION = _flag("REQUIRE_FACE_VERIFICATION", "0")

    # Gemini
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
    AI_DEFAULT_MODEL = os.environ.get("AI_DEFAULT_MODEL", "gemini-2.5-flash")
    AI_FAST_MODEL = os.environ.get("AI_FAST_MODEL", "gemini-flash-lite-latest")
    AI_PRO_MODEL = os.environ.get("AI_PRO_MODEL", "gemini-2.5-pro")

    # SMTP
    EMAIL_USER = os.environ.get("EMAIL_USER")
    EMAIL_PASS = os.environ.get("EMAIL_PASS")
    SMTP_HOST = os.environ.get("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
    EMAIL_SENDER_NAME = os.environ.get("EMAIL_SENDER_NAME", "Mira Attendance")
    OTP_FALLBACK_EMAIL = os.environ.get("OTP_FALLBACK_EMAIL")
    OTP_TTL_MINUTES = int(os.environ.get("OTP_TTL_MINUTES", "10"))

    # Dev helpers
    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")

    @classmethod
    def db_config(cls) -> dict:
        """mysql-connector keyword dict."""

        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }


DB_CONFIG = Config.db_config()

LOG_LEVEL = Config.LOG_LEVEL
SESSION_DAYS = Config.SESSION_DAYS

CAMPUS_LAT = Config.CAMPUS_LAT
CAMPUS_LON = Config.CAMPUS_LON
CAMPUS_RADIUS_KM = Config.CAMPUS_RADIUS_KM
REQUIRE_ON_CAMPUS = Config.REQUIRE_ON_CAMPUS
REQUIRE_FACE_VERIFICATION = Config.REQUIRE_FACE_VERIFICATION

GEMINI_API_KEY = Config.GEMINI_API_KEY
AI_DEFAULT_MODEL = Config.AI_DEFAULT_MODEL
AI_FAST_MODEL = Config.AI_FAST_MODEL
AI_PRO_MODEL = Config.AI_PRO_MODEL

EMAIL_USER = Config.EMAIL_USER
EMAIL_PASS = Config.EMAIL_PASS
SMTP_HOST = Config.SMTP_HOST
SMTP_PORT = Config.SMTP_PORT
EMAIL_SENDER_NAME = Config.EMAIL_SENDER_NAME
OTP_FALLBACK_EMAIL = Config.OTP_FALLBACK_EMAIL
OTP_TTL_MINUTES = Config.OTP_TTL_MINUTES
