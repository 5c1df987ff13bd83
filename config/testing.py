from .config import DB_CONFIG, OTP_EXPIRE_MINUTES, TOKEN_TTL_DAYS

ENV_MODE = "testing"

SECRET_KEY = "test-secret"

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
