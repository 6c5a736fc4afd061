from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from backend.config import Settings

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


class InvalidToken(Exception):
    """Token failed signature, structure or expiry checks."""


# ---------------- PASSWORD HASHING ----------------

def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


# Verified against when the email is unknown so both login failures cost one bcrypt check.
DUMMY_PASSWORD_HASH = hash_password("reels-dummy-password")


# ---------------- JWT TOKENS ----------------

def create_access_token(user_id, settings: Settings, now: Optional[datetime] = None) -> str:
    """Generate a JWT for a user, valid for settings.jwt_expire_minutes from `now`."""
    issued_at = now or datetime.now(timezone.utc).replace(microsecond=0)
    expire = issued_at + timedelta(minutes=settings.jwt_expire_minutes)
    # exp is encoded in whole seconds; round up so the window never ends early
    if expire.microsecond:
        expire = expire.replace(microsecond=0) + timedelta(seconds=1)
    payload = {"sub": str(user_id), "iat": issued_at.replace(microsecond=0), "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    """
    Verify signature and expiry and return the payload.
    Raises InvalidToken on any failure.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken("Invalid token") from e
    if not payload.get("sub"):
        raise InvalidToken("Token has no subject")
    return payload
