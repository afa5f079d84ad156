import os

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://postgres:postgres@db:5432/promdate")

JWT_SECRET = os.getenv("JWT_SECRET", "")
ACCESS_TOKEN_TTL_MINUTES = int(os.getenv("ACCESS_TOKEN_TTL_MINUTES", "60"))
DEV_MODE = os.getenv("DEV_MODE", "false").lower() == "true"

MAX_DAILY_INVITES = int(os.getenv("MAX_DAILY_INVITES", "5"))
QUOTA_TIMEZONE = os.getenv("QUOTA_TIMEZONE", "UTC")

WEIGHT_BASE = 1.0
WEIGHT_SAME_COHORT = float(os.getenv("WEIGHT_SAME_COHORT", "2"))
WEIGHT_SAME_TRACK = float(os.getenv("WEIGHT_SAME_TRACK", "2"))
WEIGHT_DIFFERENT_TRACK = float(os.getenv("WEIGHT_DIFFERENT_TRACK", "1"))
WEIGHT_SHARED_INTEREST = float(os.getenv("WEIGHT_SHARED_INTEREST", "1.5"))

MAX_INTERESTS = 5

DB_RETRY_ATTEMPTS = int(os.getenv("DB_RETRY_ATTEMPTS", "3"))
DB_RETRY_DELAY_SECONDS = float(os.getenv("DB_RETRY_DELAY_SECONDS", "0.2"))

CHAT_MAX_MESSAGE_LENGTH = int(os.getenv("CHAT_MAX_MESSAGE_LENGTH", "2000"))
CHAT_BLOCKED_WORDS = [
    w.strip().lower()
    for w in os.getenv("CHAT_BLOCKED_WORDS", "spam,hate,abuse").split(",")
    if w.strip()
]

ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]
