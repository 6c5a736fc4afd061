import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    """Raised at startup when a required setting is missing."""


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    cookie_secure: bool = True
    upload_dir: Path = Path("uploads")
    port: int = 3033
    log_level: str = "INFO"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment (and .env if present).
    DATABASE_URL and JWT_SECRET are required.
    """
    load_dotenv(dotenv_path=env_file)

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ConfigError("DATABASE_URL is not set")
    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        raise ConfigError("JWT_SECRET is not set")

    origins = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    return Settings(
        database_url=database_url,
        jwt_secret=jwt_secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expire_minutes=int(os.getenv("JWT_EXPIRE_MINUTES", "60")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        cookie_secure=_as_bool(os.getenv("COOKIE_SECURE", "true")),
        upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
        port=int(os.getenv("PORT", "3033")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
