import os
import tempfile

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hostel_test_db"),
    "connection_timeout": 2,
}
DB_READ_RETRIES = 1

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

TIMEZONE = "Asia/Kolkata"
SWEEP_HOUR = 23
SWEEP_MINUTE = 59
ENABLE_SCHEDULER = False

UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), "hostel_test_uploads")

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
