"""FastAPI dependencies: current user, admin gate, and per-request service wiring.

Repositories are built from the request's session and services from those
repositories; nothing is shared between requests except the engine.
"""
from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.security import user_id_from_token
from app.db.session import get_db
from app.models.user import User
from app.repositories import (
    AttemptRepository,
    BadgeRepository,
    LevelRepository,
    ScenarioRepository,
    ScenarioStepRepository,
    StepAttemptRepository,
    UserBadgeRepository,
    UserLevelRepository,
    UserRepository,
)
from app.services.auth import AuthService
from app.services.progression import ProgressionCoordinator
from app.services.submission import SubmissionService

bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]


async def get_current_user_optional(
    db: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User | None:
    """None when no Authorization header is sent; 401 when one is sent but invalid."""
    if credentials is None:
        return None
    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user = await UserRepository(db).find_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


async def get_current_user(
    user: Annotated[User | None, Depends(get_current_user_optional)],
) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Missing or invalid authorization header")
    return user


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Admin access only")
    return user


def get_auth_service(db: DbSession, settings: AppSettings) -> AuthService:
    return AuthService(UserRepository(db), UserLevelRepository(db), settings)


def get_progression_coordinator(db: DbSession, settings: AppSettings) -> ProgressionCoordinator:
    return ProgressionCoordinator(
        attempts=AttemptRepository(db),
        step_attempts=StepAttemptRepository(db),
        scenarios=ScenarioRepository(db),
        levels=LevelRepository(db),
        user_levels=UserLevelRepository(db),
        badges=BadgeRepository(db),
        user_badges=UserBadgeRepository(db),
        max_level=settings.max_level,
    )


def get_submission_service(
    db: DbSession,
    coordinator: Annotated[ProgressionCoordinator, Depends(get_progression_coordinator)],
) -> SubmissionService:
    return SubmissionService(ScenarioRepository(db), ScenarioStepRepository(db), coordinator)


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_current_user_optional)]
AdminUser = Annotated[User, Depends(require_admin)]
