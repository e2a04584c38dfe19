"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SESSIONS_PER_YEAR = 188
DETENTION_POINTS_THRESHOLD = -10
DEFAULT_HISTORY_LIMIT = 200
MIN_PASSWORD_LENGTH = 6
DEFAULT_USER_NAME = "Staff Member"
