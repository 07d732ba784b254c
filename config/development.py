import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Bands for the manager summary: (label, start, end); end <= start wraps midnight.
REPORT_BANDS = (
    ("morning", "00:00", "12:00"),
    ("afternoon", "12:00", "18:00"),
    ("night", "18:00", "00:00"),
)
