"""Values shared by every environment, read from the process environment."""
import os


def _int(name: str, default: int) -> int:
    return int(os.environ.get(name, str(default)))


# Signing secret for bearer tokens. JWT_SECRET wins, SECRET_KEY is accepted for compatibility.
SIGNING_SECRET = os.environ.get("JWT_SECRET") or os.environ.get("SECRET_KEY") or ""

TOKEN_TTL_DAYS = _int("JWT_EXPIRE_DAYS", 7)
OTP_EXPIRE_MINUTES = _int("OTP_EXPIRE_MINUTES", 10)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

DB_CONFIG = {
    "host": os.environ.get("DB_HOST", "localhost"),
    "port": _int("DB_PORT", 3306),
    "user": os.environ.get("DB_USER", "root"),
    "password": os.environ.get("DB_PASSWORD", ""),
    "database": os.environ.get("DB_NAME", "employee_db"),
    # 0 disables pooling: one fresh connection per repository call.
    "pool_size": _int("DB_POOL_SIZE", 0),
}
