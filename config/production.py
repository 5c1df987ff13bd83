import os

from .config import DB_CONFIG, LOG_LEVEL, OTP_EXPIRE_MINUTES, SIGNING_SECRET, TOKEN_TTL_DAYS

ENV_MODE = "production"

# No fallback: an empty secret stops the app at startup.
SECRET_KEY = SIGNING_SECRET

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = False
