import logging

import pydantic
from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.config import Settings
from backend.deps import get_settings
from backend.errors import AppError, InternalFailure, ValidationError, describe_validation_error
from backend.schemas import LoginIn, SignupIn, UserOut
from backend.services import session_service
from backend.utils.database import get_db

router = APIRouter(prefix="/api", tags=["auth"])

logger = logging.getLogger("backend.auth")


# ---------------------- ROUTES ----------------------
@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "API is working!"


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    response: Response,
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    img: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    logger.info(f"POST /signup received for email: {email}")
    try:
        payload = SignupIn(name=name, email=email, password=password)
    except pydantic.ValidationError as e:
        raise ValidationError(describe_validation_error(e.errors())) from e

    try:
        user, token = await session_service.register(db, settings, payload, img)
    except AppError:
        raise
    except (SQLAlchemyError, OSError, ValueError) as e:
        logger.error(f"Signup failed for {payload.email}: {e}", exc_info=True)
        raise InternalFailure() from e

    session_service.set_session_cookie(response, token, settings)
    return {
        "message": "Signup successful",
        "user": UserOut.model_validate(user).model_dump(mode="json"),
    }


@router.post("/login")
async def login(
    payload: LoginIn,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    logger.info(f"POST /login received for email: {payload.email}")
    try:
        user, token = await session_service.login(db, settings, payload)
    except AppError:
        raise
    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Login failed for {payload.email}: {e}", exc_info=True)
        raise InternalFailure() from e

    session_service.set_session_cookie(response, token, settings)
    return {
        "message": "Login successful",
        "user": UserOut.model_validate(user).model_dump(mode="json"),
    }


@router.get("/logout")
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    session_service.clear_session_cookie(response, settings)
    logger.info("Session cookie cleared.")
    return {"message": "Logged out"}
