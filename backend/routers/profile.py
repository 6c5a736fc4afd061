# backend/routers/profile.py
import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.deps import get_current_user_id
from backend.errors import InternalFailure
from backend.schemas import UserOut
from backend.services import session_service
from backend.utils.database import get_db

router = APIRouter(prefix="/api", tags=["profile"])

logger = logging.getLogger("backend.profile")


@router.get("/profile", response_model=UserOut)
async def profile(user_id: uuid.UUID = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    # Return safe user info (no hashes)
    try:
        return await session_service.get_profile(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Profile lookup failed for {user_id}: {e}", exc_info=True)
        raise InternalFailure() from e
