# backend/schemas.py
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, field_validator

from backend.services.auth_service import MAX_PASSWORD_BYTES


# ---------------------- REQUESTS ----------------------
class _Credentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class SignupIn(_Credentials):
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class LoginIn(_Credentials):
    pass


# ---------------------- RESPONSES ----------------------
class UserOut(BaseModel):
    """Public view of a user. The password hash is never part of it."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    img: str
    created_at: datetime


class ReelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    des: str
    file: str
    created_at: datetime

    @computed_field
    @property
    def url(self) -> str:
        return f"/uploads/{self.file}"
