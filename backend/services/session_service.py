# backend/services/session_service.py
# Sessions are stateless JWTs in the "token" cookie; a valid token is trusted without a db read.
import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from fastapi import Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from backend.config import Settings
from backend.errors import DuplicateUser, InvalidCredentials, NotFound
from backend.models.user import User
from backend.schemas import LoginIn, SignupIn
from backend.services import upload_service, user_store
from backend.services.auth_service import (
    DUMMY_PASSWORD_HASH,
    InvalidToken,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger("backend.auth")

SESSION_COOKIE = "token"


# ---------------------- AUTH STATES ----------------------
@dataclass(frozen=True)
class Anonymous:
    pass


@dataclass(frozen=True)
class Authenticated:
    user_id: uuid.UUID


@dataclass(frozen=True)
class Rejected:
    reason: str = "Invalid or expired token"


AuthState = Union[Anonymous, Authenticated, Rejected]


def resolve_session(token: Optional[str], settings: Settings) -> AuthState:
    if not token:
        return Anonymous()
    try:
        payload = decode_access_token(token, settings)
        return Authenticated(uuid.UUID(payload["sub"]))
    except (InvalidToken, ValueError) as e:
        logger.info(f"Session cookie rejected: {e}")
        return Rejected()


# ---------------------- COOKIES ----------------------
def cookie_params(settings: Settings) -> dict:
    """Attributes shared by setting and clearing the session cookie."""
    if settings.cookie_secure:
        return {"path": "/", "httponly": True, "secure": True, "samesite": "none"}
    return {"path": "/", "httponly": True, "secure": False, "samesite": "lax"}


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=settings.jwt_expire_minutes * 60,
        **cookie_params(settings),
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    # must match the attributes used in set_session_cookie or browsers keep the cookie
    response.delete_cookie(key=SESSION_COOKIE, **cookie_params(settings))


# ---------------------- OPERATIONS ----------------------
async def register(
    db: AsyncSession,
    settings: Settings,
    payload: SignupIn,
    avatar: Optional[UploadFile] = None,
) -> Tuple[User, str]:
    """Create the user and return it with a fresh session token."""
    if await user_store.get_user_by_email(db, payload.email):
        raise DuplicateUser()

    img = ""
    if upload_service.has_file(avatar):
        img = await upload_service.save_upload(avatar, settings.upload_dir)

    try:
        password_hash = await run_in_threadpool(hash_password, payload.password)
        user = await user_store.insert_user(db, payload.name, payload.email, password_hash, img)
    except Exception:
        if img:
            upload_service.remove_upload(img, settings.upload_dir)
        raise

    token = create_access_token(user.id, settings)
    logger.info(f"User registered: {payload.email}")
    return user, token


async def login(db: AsyncSession, settings: Settings, payload: LoginIn) -> Tuple[User, str]:
    """Check credentials and return the user with a fresh session token."""
    user = await user_store.get_user_by_email(db, payload.email)
    stored_hash = user.password_hash if user else DUMMY_PASSWORD_HASH
    matches = await run_in_threadpool(verify_password, payload.password, stored_hash)
    if not user or not matches:
        logger.warning(f"Failed login for {payload.email}")
        raise InvalidCredentials()

    token = create_access_token(user.id, settings)
    logger.info(f"User logged in: {payload.email}")
    return user, token


async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> User:
    user = await user_store.get_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user
