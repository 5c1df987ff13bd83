"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_DAYS = 7
DEFAULT_OTP_EXPIRE_MINUTES = 10
OTP_DIGITS = 6

DEFAULT_PASSWORD_METHOD = "pbkdf2:sha256:600000"
DEFAULT_SALT_LENGTH = 16

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_ADMIN_LIST_LIMIT = 100

TOKEN_SALT = "ems-access-token"
