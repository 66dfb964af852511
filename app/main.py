"""Scenario Training API - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging
from app.db.base import Base
from app.db.session import engine, AsyncSessionLocal, ping
from app.dependencies import DbSession
from app.routers import auth, badges, levels, me, scenarios, steps, users
from app.services.seeding import seed_content

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    logger.info("Starting %s", settings.app_name)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        await seed_content(db, settings)

    yield
    await engine.dispose()
    logger.info("Shut down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="Scenario-based training: levels, multi-step scenarios, scores and badges",
    lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(levels.router)
app.include_router(scenarios.router)
app.include_router(steps.router)
app.include_router(badges.router)
app.include_router(me.router)
app.include_router(users.router)


@app.get("/health")
async def health(db: DbSession):
    return {"status": "ok", "database": await ping(db)}
