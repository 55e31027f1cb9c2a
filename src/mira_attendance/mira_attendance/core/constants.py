"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_KM = 6371.0

DEFAULT_CAMPUS_LAT = 18.4550
DEFAULT_CAMPUS_LON = 79.5217
DEFAULT_CAMPUS_RADIUS_KM = 0.5

DEFAULT_SESSION_DAYS = 7
DEFAULT_OTP_TTL_MINUTES = 10
MIN_PASSWORD_LENGTH = 6

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/8.x/initials/svg?seed={seed}"

DEFAULT_AI_MODEL = "gemini-2.5-flash"
DEFAULT_AI_FAST_MODEL = "gemini-flash-lite-latest"
DEFAULT_AI_PRO_MODEL = "gemini-2.5-pro"
