"""
Credential checks against Firebase Authentication.

Account creation and ID-token verification go through the Admin SDK.
Password sign-in is a client-side operation in Firebase, so it is done
with the Auth REST API (accounts:signInWithPassword) and the project's
web API key.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import requests
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

from medilog.core.config import settings


class AuthError(Exception):
    """Bad credentials, duplicate account, missing profile or bad token."""


@dataclass
class Credential:
    uid: str
    email: str = ""
    display_name: str = ""


class IdentityProvider(Protocol):
    def create_account(self, name: str, email: str, password: str) -> Credential: ...

    def verify_password(self, email: str, password: str) -> Credential: ...

    def verify_provider_token(self, id_token: str) -> Credential: ...


class FirebaseIdentityProvider:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key if api_key is not None else settings.FIREBASE_WEB_API_KEY
        self.base_url = base_url or settings.FIREBASE_AUTH_URL
        self.timeout = timeout

    def create_account(self, name: str, email: str, password: str) -> Credential:
        try:
            record = auth.create_user(email=email, password=password, display_name=name)
        except auth.EmailAlreadyExistsError as e:
            raise AuthError("Email already in use") from e
        except (FirebaseError, ValueError) as e:
            raise AuthError(str(e)) from e

        return Credential(uid=record.uid, email=record.email or email, display_name=name)

    def verify_password(self, email: str, password: str) -> Credential:
        if not self.api_key:
            raise AuthError("FIREBASE_WEB_API_KEY is not configured")

        try:
            resp = requests.post(
                f"{self.base_url}/accounts:signInWithPassword",
                params={"key": self.api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthError(f"Sign-in request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.status_code != 200:
            error = data.get("error")
            message = error.get("message") if isinstance(error, dict) else None
            raise AuthError(message or "Invalid email or password")

        if not data.get("localId"):
            raise AuthError("Malformed sign-in response")

        return Credential(
            uid=data["localId"],
            email=data.get("email") or email,
            display_name=data.get("displayName") or "",
        )

    def verify_provider_token(self, id_token: str) -> Credential:
        """
        The browser signs in with Google through Firebase and sends us the
        resulting ID token.
        """
        try:
            decoded = auth.verify_id_token(id_token)
        except (FirebaseError, ValueError) as e:
            raise AuthError("Invalid ID token") from e

        return Credential(
            uid=decoded["uid"],
            email=decoded.get("email") or "",
            display_name=decoded.get("name") or "",
        )
