SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DATA_BACKEND = "memory"
API_BASE_URL = "http://hr-api.test"
API_TIMEOUT_SECONDS = 1.0

DB_CONFIG = {}
AUTO_INIT_DB = False

LEAVE_LEAD_DAYS = 0

DEMO_USERS = [
    {
        "user_id": "admin",
        "email": "admin@example.com",
        "password": "admin123",
        "role": "admin",
        "name": "HR Admin",
        "department": "Human Resources",
        "position": "HR Manager",
    },
    {
        "user_id": "u1",
        "email": "employee@example.com",
        "password": "employee123",
        "role": "user",
        "name": "Demo Employee",
        "department": "Engineering",
        "position": "Developer",
    },
]
