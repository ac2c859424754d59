from .base import DB_CONFIG, DEFAULT_GRACE_MINUTES, PF_CAP  # noqa: F401

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
