import os

from .base import DB_CONFIG, DEFAULT_GRACE_MINUTES, LOG_LEVEL, PF_CAP  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
