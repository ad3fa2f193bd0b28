import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

# Wall-clock timezone of the school; scan times and schedules are local times.
TIMEZONE = os.getenv("TIMEZONE", "Asia/Manila")

# Attendance rules
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "15"))
EARLY_LEAVE_MARGIN_MINUTES = int(os.getenv("EARLY_LEAVE_MARGIN_MINUTES", "10"))
WARNING_THRESHOLD = int(os.getenv("WARNING_THRESHOLD", "4"))
FAILED_THRESHOLD = int(os.getenv("FAILED_THRESHOLD", "8"))

# 'per_day' keeps one notification record per evaluation date (warnings can repeat on
# later days); 'per_enrollment' remembers sent levels for the whole enrollment.
NOTIFICATION_SCOPE = os.getenv("NOTIFICATION_SCOPE", "per_day")

# Where failed-attendance notices go when the class has no teacher email.
FAILED_ATTENDANCE_RECIPIENT = os.getenv("FAILED_ATTENDANCE_RECIPIENT", "")

# Shared secret the external scheduler sends in the X-Job-Token header.
JOB_TOKEN = os.getenv("JOB_TOKEN", "")

# Flask-Mail
MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
MAIL_PORT = int(os.getenv("MAIL_PORT", "25"))
MAIL_USE_TLS = bool(int(os.getenv("MAIL_USE_TLS", "0")))
MAIL_USERNAME = os.getenv("MAIL_USERNAME") or None
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD") or None
MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "attendance@localhost")
MAIL_SUPPRESS_SEND = False

DEBUG = False

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
