import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./travelmates.db")

# Logging
LOG_PATH = os.getenv("LOG_PATH")  # defaults to ./logs/api.log
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma separated list of allowed origins for the web client
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Firebase Cloud Messaging (push delivery of notifications)
FIREBASE_CREDENTIALS_PATH = os.getenv(
    "FIREBASE_CREDENTIALS_PATH",
    str(Path(__file__).resolve().parent / "serviceAccountKey.json"),
)

# Notification feed returns at most this many items
NOTIFICATIONS_LIMIT = int(os.getenv("NOTIFICATIONS_LIMIT", "50"))

DEFAULT_JOIN_MESSAGE = os.getenv("DEFAULT_JOIN_MESSAGE", "I'd like to join your trip!")
