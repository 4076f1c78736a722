"""
Firebase admin initialization and helpers.

The Admin SDK is used for two things: creating and verifying user
credentials (Firebase Authentication) and reading/writing the per-user
documents in Firestore. Password sign-in is not available through the
Admin SDK, see ``medilog.services.identity`` for that path.
"""

import os

import firebase_admin
from firebase_admin import credentials, firestore

from medilog.core.config import settings
from medilog.services.logger import get_logger

logger = get_logger(__name__)

# Global references to avoid re-initialization
_firebase_app = None
db = None


def init_firebase():
    """
    Initialize Firebase Admin SDK if not already initialized.

    The credentials path comes from FIREBASE_CREDENTIALS (env or .env),
    falling back to medilog/core/firebase_key.json for local development.
    """

    global _firebase_app, db

    # Prevent re-initialization (important for Uvicorn reload)
    if firebase_admin._apps:
        if db is None:
            db = firestore.client()
        return

    cred_path = settings.FIREBASE_CREDENTIALS

    if not os.path.exists(cred_path):
        raise RuntimeError(
            f"Firebase credentials not found at: {cred_path}\n"
            "Set FIREBASE_CREDENTIALS env var or place firebase_key.json correctly."
        )

    cred = credentials.Certificate(cred_path)
    _firebase_app = firebase_admin.initialize_app(cred)

    db = firestore.client()

    logger.info("Firebase Admin initialized successfully.")


def get_db():
    """Return the Firestore client, initializing Firebase on first use."""
    if db is None:
        init_firebase()
    return db
