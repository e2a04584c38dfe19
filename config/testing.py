import os

from .base import DB_CONFIG, DETENTION_POINTS_THRESHOLD, SESSIONS_PER_YEAR  # noqa: F401

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
