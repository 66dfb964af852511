"""Badge routes: public listing, admin CRUD."""
from fastapi import APIRouter, HTTPException

from app.dependencies import AdminUser, DbSession
from app.repositories import BadgeRepository
from app.schemas.progress import BadgeInSchema, BadgeOutSchema, BadgeUpdateSchema

router = APIRouter(prefix="/badges", tags=["badges"])


@router.get("", response_model=list[BadgeOutSchema])
async def list_badges(db: DbSession):
    return await BadgeRepository(db).find_all()


@router.get("/{badge_id}", response_model=BadgeOutSchema)
async def get_badge(badge_id: int, db: DbSession):
    badge = await BadgeRepository(db).find_by_id(badge_id)
    if not badge:
        raise HTTPException(status_code=404, detail="Badge not found")
    return badge


@router.post("", response_model=BadgeOutSchema, status_code=201)
async def create_badge(body: BadgeInSchema, db: DbSession, _: AdminUser):
    """One badge per level; a second badge for the same level is a 409."""
    return await BadgeRepository(db).create(**body.model_dump())


@router.put("/{badge_id}", response_model=BadgeOutSchema)
async def update_badge(badge_id: int, body: BadgeUpdateSchema, db: DbSession, _: AdminUser):
    badge = await BadgeRepository(db).update(badge_id, **body.model_dump(exclude_unset=True))
    if not badge:
        raise HTTPException(status_code=404, detail="Badge not found")
    return badge


@router.delete("/{badge_id}", status_code=204)
async def delete_badge(badge_id: int, db: DbSession, _: AdminUser):
    if not await BadgeRepository(db).delete(badge_id):
        raise HTTPException(status_code=404, detail="Badge not found")
