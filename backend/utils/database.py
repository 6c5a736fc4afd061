# backend/utils/database.py
import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger("backend.db")

Base = declarative_base()


def build_engine(database_url: str) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=False, future=True, pool_pre_ping=True)
    logger.info(f"Database engine created for dialect '{engine.dialect.name}'")
    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    # models must be imported so their tables are registered on Base
    from backend.models import reel, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created.")


# Dependency for route injection
async def get_db(request: Request):
    async with request.app.state.sessionmaker() as session:
        yield session
