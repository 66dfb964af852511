"""Progress of the signed-in user: levels, badges, attempts."""
from fastapi import APIRouter, HTTPException

from app.dependencies import CurrentUser, DbSession
from app.repositories import (
    AttemptRepository,
    StepAttemptRepository,
    UserBadgeRepository,
    UserLevelRepository,
)
from app.schemas.progress import (
    AttemptOutSchema,
    StepAttemptOutSchema,
    UserBadgeOutSchema,
    UserLevelOutSchema,
)

router = APIRouter(prefix="/me", tags=["progress"])


@router.get("/levels", response_model=list[UserLevelOutSchema])
async def my_levels(db: DbSession, current_user: CurrentUser):
    """Levels the user has reached; levels without a row are not reached yet."""
    return await UserLevelRepository(db).find_by_user(current_user.id)


@router.get("/badges", response_model=list[UserBadgeOutSchema])
async def my_badges(db: DbSession, current_user: CurrentUser):
    return await UserBadgeRepository(db).find_by_user(current_user.id)


@router.get("/attempts", response_model=list[AttemptOutSchema])
async def my_attempts(db: DbSession, current_user: CurrentUser):
    return await AttemptRepository(db).find_by_user(current_user.id)


@router.get("/attempts/level/{level_id}", response_model=list[AttemptOutSchema])
async def my_attempts_in_level(level_id: int, db: DbSession, current_user: CurrentUser):
    return await AttemptRepository(db).find_by_user_in_level(current_user.id, level_id)


@router.get("/attempts/{attempt_id}/steps", response_model=list[StepAttemptOutSchema])
async def my_attempt_steps(attempt_id: int, db: DbSession, current_user: CurrentUser):
    attempt = await AttemptRepository(db).find_by_id(attempt_id)
    if not attempt or attempt.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Attempt not found")
    return await StepAttemptRepository(db).find_by_attempt(attempt_id)
