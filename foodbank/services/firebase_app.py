import base64
import binascii
import json
import logging
import os

import firebase_admin
from firebase_admin import credentials

from foodbank.config import (
    DEFAULT_SERVICE_ACCOUNT_FILE,
    FIREBASE_SERVICE_ACCOUNT,
    FIREBASE_SERVICE_ACCOUNT_PATH,
)

logger = logging.getLogger(__name__)


class FirebaseConfigError(RuntimeError):
    pass


def _parse_service_account(raw: str) -> dict:
    """Accepts the service account as plain JSON or as base64-encoded JSON."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    try:
        return json.loads(base64.b64decode(raw, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise FirebaseConfigError(
            "FIREBASE_SERVICE_ACCOUNT must be valid JSON or base64-encoded JSON"
        ) from e


def _load_credentials() -> credentials.Certificate:
    if FIREBASE_SERVICE_ACCOUNT:
        return credentials.Certificate(_parse_service_account(FIREBASE_SERVICE_ACCOUNT))
    if FIREBASE_SERVICE_ACCOUNT_PATH:
        return credentials.Certificate(FIREBASE_SERVICE_ACCOUNT_PATH)
    if os.path.exists(DEFAULT_SERVICE_ACCOUNT_FILE):
        return credentials.Certificate(DEFAULT_SERVICE_ACCOUNT_FILE)
    raise FirebaseConfigError(
        "Firebase service account not found. Set FIREBASE_SERVICE_ACCOUNT_PATH, "
        f"FIREBASE_SERVICE_ACCOUNT, or place {DEFAULT_SERVICE_ACCOUNT_FILE} in the working directory."
    )


def initialize_firebase() -> firebase_admin.App:
    """Returns the default Firebase app, initialising it on first use."""
    # Singleton pattern: only the first caller initialises the SDK
    if not firebase_admin._apps:
        firebase_admin.initialize_app(_load_credentials())
        logger.info("Firebase Admin SDK initialized successfully.")
    return firebase_admin.get_app()
