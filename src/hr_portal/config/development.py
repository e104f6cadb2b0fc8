import os

from . import env_optional_int

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "api" talks to the HR REST backend, "memory" keeps everything in-process.
DATA_BACKEND = os.getenv("DATA_BACKEND", "memory")
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

# If enabled, app will apply the packaged schema.sql (or SCHEMA_PATH) on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Blank uses the schema.sql shipped with the package.
SCHEMA_PATH = os.getenv("SCHEMA_PATH") or None

LEAVE_LEAD_DAYS = env_optional_int("LEAVE_LEAD_DAYS", 0)

DEMO_USERS = [
    {
        "user_id": "admin",
        "email": "admin@example.com",
        "password": os.getenv("DEMO_ADMIN_PASSWORD", "admin123"),
        "role": "admin",
        "name": "HR Admin",
        "department": "Human Resources",
        "position": "HR Manager",
    },
    {
        "user_id": "u1",
        "email": "employee@example.com",
        "password": os.getenv("DEMO_USER_PASSWORD", "employee123"),
        "role": "user",
        "name": "Demo Employee",
        "department": "Engineering",
        "position": "Developer",
    },
]
