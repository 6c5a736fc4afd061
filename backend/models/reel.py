# backend/models/reel.py
from datetime import datetime, timezone

import sqlalchemy as sa

from backend.utils.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Reel(Base):
    __tablename__ = "reels"
    id = sa.Column(sa.Integer, primary_key=True, autoincrement=True)
    des = sa.Column(sa.Text, nullable=False)
    # generated upload filename, never a client supplied path
    file = sa.Column(sa.String(255), nullable=False)
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
