# backend/deps.py
import uuid

from fastapi import Cookie, Depends, Request

from backend.config import Settings
from backend.errors import Unauthenticated
from backend.services.session_service import (
    SESSION_COOKIE,
    Authenticated,
    AuthState,
    Rejected,
    resolve_session,
)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_state(
    token: str | None = Cookie(None, alias=SESSION_COOKIE),
    settings: Settings = Depends(get_settings),
) -> AuthState:
    return resolve_session(token, settings)


def get_current_user_id(state: AuthState = Depends(get_auth_state)) -> uuid.UUID:
    """
    Expect a valid session cookie.
    Returns the user id from the token or raises 401.
    """
    if isinstance(state, Authenticated):
        return state.user_id
    if isinstance(state, Rejected):
        raise Unauthenticated("Invalid token")
    raise Unauthenticated("Unauthorized")
