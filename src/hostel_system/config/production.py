import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hostel_db"),
    "connection_timeout": int(os.getenv("DB_TIMEOUT_SECONDS", "5")),
}
DB_READ_RETRIES = int(os.getenv("DB_READ_RETRIES", "3"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")
SWEEP_HOUR = int(os.getenv("SWEEP_HOUR", "23"))
SWEEP_MINUTE = int(os.getenv("SWEEP_MINUTE", "59"))
ENABLE_SCHEDULER = bool(int(os.getenv("ENABLE_SCHEDULER", "1")))

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "/var/lib/hostel/uploads")

DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
