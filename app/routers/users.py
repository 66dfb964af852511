"""Admin user management and read access to any user's progress."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import AdminUser, DbSession, get_auth_service
from app.models.user import User
from app.repositories import (
    AttemptRepository,
    BadgeRepository,
    UserBadgeRepository,
    UserLevelRepository,
    UserRepository,
)
from app.schemas.progress import (
    AttemptOutSchema,
    UserBadgeInSchema,
    UserBadgeOutSchema,
    UserLevelOutSchema,
)
from app.schemas.user import UserCreateSchema, UserOutSchema, UserUpdateSchema
from app.services.auth import AuthService

router = APIRouter(prefix="/users", tags=["users"])


async def _get_user_or_404(db: DbSession, user_id: int) -> User:
    user = await UserRepository(db).find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=list[UserOutSchema])
async def list_users(db: DbSession, _: AdminUser):
    return await UserRepository(db).find_all()


@router.get("/{user_id}", response_model=UserOutSchema)
async def get_user(user_id: int, db: DbSession, _: AdminUser):
    return await _get_user_or_404(db, user_id)


@router.post("", response_model=UserOutSchema, status_code=201)
async def create_user(
    body: UserCreateSchema,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    _: AdminUser,
):
    """Same checks as self-registration, with the role chosen by the admin."""
    return await auth.register(body.email, body.username, body.password, role=body.role)


@router.put("/{user_id}", response_model=UserOutSchema)
async def update_user(user_id: int, body: UserUpdateSchema, db: DbSession, _: AdminUser):
    user = await UserRepository(db).update(user_id, **body.model_dump(exclude_unset=True))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: int, db: DbSession, admin: AdminUser):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="Admins cannot delete their own account")
    if not await UserRepository(db).delete(user_id):
        raise HTTPException(status_code=404, detail="User not found")


# ---------- progress of one user ----------

@router.get("/{user_id}/levels", response_model=list[UserLevelOutSchema])
async def list_user_levels(user_id: int, db: DbSession, _: AdminUser):
    await _get_user_or_404(db, user_id)
    return await UserLevelRepository(db).find_by_user(user_id)


@router.get("/{user_id}/attempts", response_model=list[AttemptOutSchema])
async def list_user_attempts(user_id: int, db: DbSession, _: AdminUser):
    await _get_user_or_404(db, user_id)
    return await AttemptRepository(db).find_by_user(user_id)


@router.get("/{user_id}/attempts/level/{level_id}", response_model=list[AttemptOutSchema])
async def list_user_attempts_in_level(user_id: int, level_id: int, db: DbSession, _: AdminUser):
    await _get_user_or_404(db, user_id)
    return await AttemptRepository(db).find_by_user_in_level(user_id, level_id)


@router.get("/{user_id}/attempts/scenario/{scenario_id}", response_model=AttemptOutSchema)
async def get_user_attempt_for_scenario(user_id: int, scenario_id: int, db: DbSession, _: AdminUser):
    attempt = await AttemptRepository(db).find_by_user_and_scenario(user_id, scenario_id)
    if not attempt:
        raise HTTPException(status_code=404, detail="Attempt not found")
    return attempt


@router.get("/{user_id}/badges", response_model=list[UserBadgeOutSchema])
async def list_user_badges(user_id: int, db: DbSession, _: AdminUser):
    await _get_user_or_404(db, user_id)
    return await UserBadgeRepository(db).find_by_user(user_id)


@router.post("/{user_id}/badges", response_model=UserBadgeOutSchema, status_code=201)
async def award_badge(user_id: int, body: UserBadgeInSchema, db: DbSession, _: AdminUser):
    """Manual award; a badge the user already holds is a 409."""
    await _get_user_or_404(db, user_id)
    if not await BadgeRepository(db).find_by_id(body.badge_id):
        raise HTTPException(status_code=404, detail="Badge not found")

    user_badges = UserBadgeRepository(db)
    if await user_badges.create_if_absent(user_id, body.badge_id) is None:
        raise HTTPException(status_code=409, detail="User already holds this badge")
    return await user_badges.find_by_user_and_badge(user_id, body.badge_id)


@router.delete("/{user_id}/badges/{badge_id}", status_code=204)
async def revoke_badge(user_id: int, badge_id: int, db: DbSession, _: AdminUser):
    if not await UserBadgeRepository(db).revoke(user_id, badge_id):
        raise HTTPException(status_code=404, detail="User badge not found")
