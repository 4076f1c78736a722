"""
Register / login / logout and the route guard.

Every successful auth action writes the user into the session and returns
the path the client should go to next. The guard is re-evaluated on every
navigation and only ever looks at the cached session.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from medilog.models.user import Role, User
from medilog.services.identity import AuthError, IdentityProvider
from medilog.services.logger import get_logger, log_debug
from medilog.services.record_store import RecordStore
from medilog.services.session_store import SessionStore

logger = get_logger(__name__)

LANDING_PATH = "/"
LOGIN_PATH = "/auth/login"


@dataclass
class AuthResult:
    user: Optional[User]
    redirect: str


def dashboard_path(role: Role) -> str:
    if role is Role.PATIENT:
        return "/dashboard/patient"
    if role is Role.CAREGIVER:
        return "/dashboard/caregiver"
    raise ValueError(f"Unknown role: {role!r}")


def _stored_role(value) -> Role:
    try:
        return Role(value or Role.PATIENT.value)
    except ValueError:
        logger.warning("Unknown stored role %r, falling back to patient", value)
        return Role.PATIENT


class AuthGateway:
    def __init__(self, identity: IdentityProvider, records: RecordStore, session: SessionStore):
        self.identity = identity
        self.records = records
        self.session = session

    def _sign_in(self, user: User) -> AuthResult:
        self.session.save(user)
        log_debug("session_started", {"uid": user.id, "role": user.role.value})
        return AuthResult(user=user, redirect=dashboard_path(user.role))

    def register(self, name: str, email: str, password: str, role: Role) -> AuthResult:
        try:
            cred = self.identity.create_account(name, email, password)
        except AuthError as e:
            logger.info("Registration failed for %s: %s", email, e)
            raise

        self.records.create_profile(cred.uid, name, email, role)
        return self._sign_in(User(id=cred.uid, name=name, email=email, role=role))

    def login(self, email: str, password: str, role: Optional[Role] = None) -> AuthResult:
        # `role` comes from the login form; the profile document is authoritative.
        try:
            cred = self.identity.verify_password(email, password)
            profile = self.records.get_profile(cred.uid)
            if profile is None:
                raise AuthError("User profile not found")
        except AuthError as e:
            logger.info("Login failed for %s: %s", email, e)
            raise

        user = User(
            id=cred.uid,
            name=profile.get("name") or "",
            email=profile.get("email") or email,
            role=_stored_role(profile.get("role")),
        )
        return self._sign_in(user)

    def login_with_google(self, id_token: str) -> AuthResult:
        try:
            cred = self.identity.verify_provider_token(id_token)
        except AuthError as e:
            logger.info("Google login failed: %s", e)
            raise

        profile = self.records.get_profile(cred.uid)
        if profile is None:
            role = Role.PATIENT
            name, email = cred.display_name, cred.email
            self.records.create_profile(cred.uid, name, email, role)
        else:
            role = _stored_role(profile.get("role"))
            name = profile.get("name") or cred.display_name
            email = profile.get("email") or cred.email

        return self._sign_in(User(id=cred.uid, name=name, email=email, role=role))

    def logout(self) -> AuthResult:
        self.session.clear()
        return AuthResult(user=None, redirect=LANDING_PATH)

    def guard(self, path: str) -> Optional[str]:
        """Where to send the client for `path`, or None to stay."""
        user = self.session.current
        is_auth_route = "/auth" in path
        is_root_route = path == LANDING_PATH

        if user is not None and is_auth_route:
            return dashboard_path(user.role)
        if user is None and not is_auth_route and not is_root_route:
            return LOGIN_PATH
        return None
