# backend/routers/reels.py
import logging
from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.config import Settings
from backend.deps import get_settings
from backend.errors import InternalFailure, ValidationError
from backend.schemas import ReelOut
from backend.services import reel_service, upload_service
from backend.utils.database import get_db

router = APIRouter(prefix="/api", tags=["reels"])

logger = logging.getLogger("backend.reels")


@router.post("/reels", status_code=status.HTTP_201_CREATED)
async def post_reel(
    des: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not upload_service.has_file(file) or not des or not des.strip():
        logger.warning("POST /reels rejected: missing file or description")
        raise ValidationError(reel_service.MISSING_FIELDS)

    filename = None
    try:
        filename = await upload_service.save_upload(file, settings.upload_dir)
        reel = await reel_service.create_reel(db, des, filename)
    except (SQLAlchemyError, OSError) as e:
        if filename:
            upload_service.remove_upload(filename, settings.upload_dir)
        logger.error(f"Posting reel failed: {e}", exc_info=True)
        raise InternalFailure() from e

    return {"message": "Reel posted", "reel": ReelOut.model_validate(reel).model_dump(mode="json")}


@router.get("/reels", response_model=List[ReelOut])
async def get_reels(db: AsyncSession = Depends(get_db)):
    try:
        return await reel_service.list_reels(db)
    except SQLAlchemyError as e:
        logger.error(f"Listing reels failed: {e}", exc_info=True)
        raise InternalFailure() from e
