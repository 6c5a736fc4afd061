# backend/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend.config import Settings, load_settings
from backend.errors import register_exception_handlers
from backend.routers import auth, profile, reels
from backend.utils.database import build_engine, build_sessionmaker, create_tables

logger = logging.getLogger("backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Application Startup: connecting to database...")
    engine = build_engine(settings.database_url)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    await create_tables(engine)
    yield
    await engine.dispose()
    logger.info("Application Shutdown: database engine disposed.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application. Settings are loaded from the environment when not
    given; a missing JWT_SECRET or DATABASE_URL aborts startup.
    """
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Reels Backend", lifespan=lifespan)
    app.state.settings = settings

    # --- CORS: cookies need explicit origins, not "*" ---
    app.add_middleware(
        CORSMiddleware, allow_origins=settings.cors_origins, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    register_exception_handlers(app)

    logger.info("Including routers...")
    app.include_router(auth.router)     # /api/ping, /api/signup, /api/login, /api/logout
    app.include_router(profile.router)  # /api/profile
    app.include_router(reels.router)    # /api/reels

    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = load_settings()
    uvicorn.run(create_app(_settings), host="0.0.0.0", port=_settings.port)
