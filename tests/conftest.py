"""Shared test configuration: in-memory database per test, HTTP client, content helpers."""
import os

# Must be set before app modules read settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["MAX_LEVEL"] = "6"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.repositories import (  # noqa: E402
    BadgeRepository,
    LevelRepository,
    ScenarioRepository,
    ScenarioStepRepository,
    UserRepository,
)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


# ── Helpers ──────────────────────────────────────────────────────


async def make_user(db, email="learner@example.com", role="user"):
    return await UserRepository(db).create(
        email=email, username=email.split("@")[0], hashed_password="not-a-real-hash", role=role
    )


async def make_level(db, level_id, with_badge=True):
    level = await LevelRepository(db).create(id=level_id, title=f"Level {level_id}")
    if with_badge:
        await BadgeRepository(db).create(
            level_id=level_id,
            name=f"Level {level_id} Badge",
            description=f"Finished level {level_id}",
            icon_url=f"/icons/level-{level_id}.png",
        )
    return level


async def make_scenario(db, level_id, actions=("A", "B", "C", "D"), orders=None):
    """Scenario whose step with step_order i+1 expects actions[i].

    Steps are inserted in the given `orders` so storage order can differ from step order.
    """
    scenario = await ScenarioRepository(db).create(level_id=level_id, title=f"Scenario in level {level_id}")
    steps = ScenarioStepRepository(db)
    for order in orders or range(1, len(actions) + 1):
        await steps.create(
            scenario_id=scenario.id,
            step_order=order,
            prompt=f"Step {order}",
            options={"A": "a", "B": "b", "C": "c", "D": "d"},
            correct_action=actions[order - 1],
            feedback=f"Feedback {order}",
        )
    return scenario
