"""
API dependencies.

Services live on app.state (wired in medilog.main) and are handed to the
routes through these dependencies. Each client carries its own session
token, either as the session cookie or as "Authorization: Bearer <token>";
no token or an unknown token means no signed-in user.
"""

from typing import Callable, List, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from medilog.core.config import settings
from medilog.models.user import Role, User
from medilog.services.auth_service import AuthGateway
from medilog.services.record_capture import CaptureRegistry
from medilog.services.record_store import RecordStore
from medilog.services.session_store import SessionStore

security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    if creds is not None and creds.credentials:
        return creds.credentials
    return request.cookies.get(settings.SESSION_COOKIE)


def get_session(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
) -> SessionStore:
    return request.app.state.sessions.open(token)


def get_records(request: Request) -> RecordStore:
    return request.app.state.records


def get_gateway(
    request: Request,
    session: SessionStore = Depends(get_session),
) -> AuthGateway:
    return AuthGateway(request.app.state.identity, get_records(request), session)


def get_captures(request: Request) -> CaptureRegistry:
    return request.app.state.captures


def get_assistant(request: Request):
    return request.app.state.assistant


def require_session(session: SessionStore = Depends(get_session)) -> User:
    user = session.current
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return user


def require_role(allowed: List[Role]) -> Callable:
    """
    Return a FastAPI dependency that enforces the session user's role.
    """

    def _checker(user: User = Depends(require_session)) -> User:
        if user.role not in allowed:
            raise HTTPException(
                status_code=403,
                detail="Insufficient permissions",
            )
        return user

    return _checker
