import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "mutabaah_db"),
}

# Trusted clock for the reporting-period gate
TIMEZONE = os.getenv("TIMEZONE", "Asia/Jakarta")

# Employees must opt in to a month before writing to it
REQUIRE_ACTIVATION = bool(int(os.getenv("REQUIRE_ACTIVATION", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# Apply database/schema.sql on startup (idempotent: CREATE TABLE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
