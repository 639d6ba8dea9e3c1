# file: config.py

import os
from dotenv import load_dotenv

load_dotenv()

# Firebase credentials, tried in this order by services.firebase_app
FIREBASE_SERVICE_ACCOUNT = os.getenv("FIREBASE_SERVICE_ACCOUNT")
FIREBASE_SERVICE_ACCOUNT_PATH = os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH")
DEFAULT_SERVICE_ACCOUNT_FILE = "serviceAccountKey.json"

# Shared secret for the per-event notification endpoints
API_PASSWORD = os.getenv("API_PASSWORD")

EXPIRATION_THRESHOLD_DAYS = int(os.getenv("EXPIRATION_THRESHOLD_DAYS", "3"))

DISPATCH_MAX_CONCURRENCY = int(os.getenv("DISPATCH_MAX_CONCURRENCY", "10"))
DISPATCH_TIMEOUT_SECONDS = float(os.getenv("DISPATCH_TIMEOUT_SECONDS", "10"))

SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE", "Europe/Lisbon")
EXPIRATION_CHECK_HOUR = int(os.getenv("EXPIRATION_CHECK_HOUR", "9"))
PICKUP_REMINDER_HOUR = int(os.getenv("PICKUP_REMINDER_HOUR", "8"))

PRUNE_INVALID_TOKENS = os.getenv("PRUNE_INVALID_TOKENS", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
