import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "training_attendance"),
}

# Reference boundaries for late / leave-early classification (HH:MM)
TRAINING_START_TIME = os.getenv("TRAINING_START_TIME", "09:00")
TRAINING_END_TIME = os.getenv("TRAINING_END_TIME", "18:00")

MESSAGE_LOCALE = os.getenv("MESSAGE_LOCALE", "en")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
