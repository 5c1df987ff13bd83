import os

from .config import DB_CONFIG, LOG_LEVEL, OTP_EXPIRE_MINUTES, SIGNING_SECRET, TOKEN_TTL_DAYS

ENV_MODE = "development"

SECRET_KEY = SIGNING_SECRET or "dev-secret-change-me"

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also upsert demo admin/hr/employee accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
