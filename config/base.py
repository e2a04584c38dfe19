"""Settings shared by every environment, read from DB_* and related env vars."""
import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_admin"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Behaviour total at or below which the detention signal fires.
DETENTION_POINTS_THRESHOLD = int(os.getenv("DETENTION_POINTS_THRESHOLD", "-10"))
# Attendance sessions in a school year; every student starts fully present.
SESSIONS_PER_YEAR = int(os.getenv("SESSIONS_PER_YEAR", "188"))
