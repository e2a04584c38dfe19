import os

from .base import DB_CONFIG, DETENTION_POINTS_THRESHOLD, LOG_LEVEL, SESSIONS_PER_YEAR  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
