import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "training_attendance"),
}

TRAINING_START_TIME = os.getenv("TRAINING_START_TIME", "09:00")
TRAINING_END_TIME = os.getenv("TRAINING_END_TIME", "18:00")

MESSAGE_LOCALE = os.getenv("MESSAGE_LOCALE", "en")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
