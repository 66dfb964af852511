"""Level routes: public listing, admin CRUD."""
from fastapi import APIRouter, HTTPException

from app.dependencies import AdminUser, DbSession
from app.repositories import LevelRepository
from app.schemas.scenario import LevelInSchema, LevelOutSchema, LevelUpdateSchema

router = APIRouter(prefix="/levels", tags=["levels"])


@router.get("", response_model=list[LevelOutSchema])
async def list_levels(db: DbSession):
    return await LevelRepository(db).find_all()


@router.get("/{level_id}", response_model=LevelOutSchema)
async def get_level(level_id: int, db: DbSession):
    level = await LevelRepository(db).find_by_id(level_id)
    if not level:
        raise HTTPException(status_code=404, detail="Level not found")
    return level


@router.post("", response_model=LevelOutSchema, status_code=201)
async def create_level(body: LevelInSchema, db: DbSession, _: AdminUser):
    return await LevelRepository(db).create(**body.model_dump())


@router.put("/{level_id}", response_model=LevelOutSchema)
async def update_level(level_id: int, body: LevelUpdateSchema, db: DbSession, _: AdminUser):
    level = await LevelRepository(db).update(level_id, **body.model_dump(exclude_unset=True))
    if not level:
        raise HTTPException(status_code=404, detail="Level not found")
    return level


@router.delete("/{level_id}", status_code=204)
async def delete_level(level_id: int, db: DbSession, _: AdminUser):
    if not await LevelRepository(db).delete(level_id):
        raise HTTPException(status_code=404, detail="Level not found")
