# backend/services/reel_service.py
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.errors import ValidationError
from backend.models.reel import Reel

logger = logging.getLogger("backend.reels")

MISSING_FIELDS = "Missing file or description"


async def create_reel(db: AsyncSession, des: str, file: str) -> Reel:
    if not des or not des.strip() or not file:
        raise ValidationError(MISSING_FIELDS)
    reel = Reel(des=des, file=file)
    db.add(reel)
    await db.commit()
    await db.refresh(reel)
    logger.info(f"Reel {reel.id} created with file {file}")
    return reel


async def list_reels(db: AsyncSession) -> List[Reel]:
    """All reels, newest first."""
    q = await db.execute(select(Reel).order_by(Reel.created_at.desc(), Reel.id.desc()))
    return list(q.scalars().all())
