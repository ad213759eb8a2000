import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "punchclock_test"),
    "connection_timeout": 2,
}

JWT_SECRET = "test-jwt-secret"
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_MINUTES = 60

DASHBOARD_WORKERS = 2
DASHBOARD_QUERY_TIMEOUT = 2.0

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
