"""Authentication routes.

Credentials are checked against Firebase Authentication. Every successful
sign-in opens a fresh session under a new token, returned both as the
session cookie and in the body; the response also tells the client where
to navigate next.
"""
from typing import Callable

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response

from medilog.api.deps import get_captures, get_gateway, get_records, get_session
from medilog.core.config import settings
from medilog.models.user import AuthResponse, GoogleLoginRequest, LoginRequest, RegisterRequest
from medilog.services.auth_service import AuthGateway, AuthResult
from medilog.services.identity import AuthError
from medilog.services.logger import log_debug
from medilog.services.session_store import SessionStore

router = APIRouter(prefix="/auth", tags=["auth"])


def _response(result: AuthResult, token=None) -> AuthResponse:
    return AuthResponse(user=result.user, redirect=result.redirect, session_token=token)


def _sign_in(
    request: Request,
    response: Response,
    previous: SessionStore,
    action: Callable[[AuthGateway], AuthResult],
) -> AuthResponse:
    sessions = request.app.state.sessions
    token = sessions.new_token()
    gateway = AuthGateway(request.app.state.identity, get_records(request), sessions.open(token))

    try:
        result = action(gateway)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    # The client's earlier session (if any) is replaced, and a different
    # user's capture must not outlive it.
    old_user = previous.current
    if old_user is not None:
        previous.clear()
        if old_user.id != result.user.id:
            get_captures(request).discard(old_user.id)
            log_debug("session_replaced", {"old_uid": old_user.id, "uid": result.user.id})

    response.set_cookie(
        settings.SESSION_COOKIE,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return _response(result, token)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: Request,
    response: Response,
    payload: RegisterRequest = Body(...),
    session: SessionStore = Depends(get_session),
):
    return _sign_in(
        request, response, session,
        lambda gw: gw.register(payload.name, payload.email, payload.password, payload.role),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    response: Response,
    payload: LoginRequest = Body(...),
    session: SessionStore = Depends(get_session),
):
    return _sign_in(
        request, response, session,
        lambda gw: gw.login(payload.email, payload.password, payload.role),
    )


@router.post("/google", response_model=AuthResponse)
async def login_with_google(
    request: Request,
    response: Response,
    payload: GoogleLoginRequest = Body(...),
    session: SessionStore = Depends(get_session),
):
    return _sign_in(request, response, session, lambda gw: gw.login_with_google(payload.id_token))


@router.post("/logout", response_model=AuthResponse)
async def logout(request: Request, response: Response, gateway: AuthGateway = Depends(get_gateway)):
    user = gateway.session.current
    if user is not None:
        get_captures(request).discard(user.id)
    response.delete_cookie(settings.SESSION_COOKIE)
    return _response(gateway.logout())


@router.get("/me")
async def get_me(session: SessionStore = Depends(get_session)):
    return {"user": session.current}
