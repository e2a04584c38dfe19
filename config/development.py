import os

from .base import DB_CONFIG, DETENTION_POINTS_THRESHOLD, SESSIONS_PER_YEAR  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo admin + tutor groups on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
