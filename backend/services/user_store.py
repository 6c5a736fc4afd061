# backend/services/user_store.py
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.errors import DuplicateUser
from backend.models.user import User


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    q = await db.execute(select(User).filter_by(email=email))
    return q.scalars().first()


async def get_user_by_id(db: AsyncSession, user_id: uuid.UUID) -> Optional[User]:
    return await db.get(User, user_id)


async def insert_user(db: AsyncSession, name: str, email: str, password_hash: str, img: str = "") -> User:
    """Insert a new user. A unique-index violation on email raises DuplicateUser."""
    user = User(name=name, email=email, password_hash=password_hash, img=img)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateUser() from e
    await db.refresh(user)
    return user
