# medilog/core/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Service account JSON used by the Firebase Admin SDK
    FIREBASE_CREDENTIALS: str = "medilog/core/firebase_key.json"

    # Web API key, needed for password sign-in through the Auth REST API
    FIREBASE_WEB_API_KEY: str = ""
    FIREBASE_AUTH_URL: str = "https://identitytoolkit.googleapis.com/v1"

    # Where the signed-in user is persisted. Empty keeps it in memory only.
    SESSION_FILE: str = ".medilog_session.json"
    SESSION_KEY: str = "medilog-user"
    # Each client gets its own session token, sent back as this cookie
    # (or as "Authorization: Bearer <token>")
    SESSION_COOKIE: str = "medilog_session"
    SESSION_COOKIE_SECURE: bool = False

    # Simulated latency of the mock assistant (seconds)
    CHAT_DELAY_SECONDS: float = 1.0
    SUMMARY_DELAY_SECONDS: float = 2.0
    FLASHCARD_DELAY_SECONDS: float = 2.0

    MEDILOG_DEBUG_MODE: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
