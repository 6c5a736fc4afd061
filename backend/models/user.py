# backend/models/user.py
import uuid
from datetime import datetime, timezone

import sqlalchemy as sa

from backend.utils.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = sa.Column(sa.Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = sa.Column(sa.String(255), nullable=False)
    # the unique index is what actually keeps concurrent signups from sharing an email
    email = sa.Column(sa.String(255), unique=True, nullable=False, index=True)
    password_hash = sa.Column(sa.String(512), nullable=False)
    img = sa.Column(sa.String(255), nullable=False, default="")
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=_utcnow)
