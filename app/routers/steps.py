"""Admin routes for editing or removing a single scenario step."""
from fastapi import APIRouter, HTTPException

from app.dependencies import AdminUser, DbSession
from app.repositories import ScenarioStepRepository
from app.schemas.scenario import StepAdminOutSchema, StepUpdateSchema

router = APIRouter(prefix="/steps", tags=["steps"])


@router.put("/{step_id}", response_model=StepAdminOutSchema)
async def update_step(step_id: int, body: StepUpdateSchema, db: DbSession, _: AdminUser):
    step = await ScenarioStepRepository(db).update(step_id, **body.model_dump(exclude_unset=True))
    if not step:
        raise HTTPException(status_code=404, detail="Step not found")
    return step


@router.delete("/{step_id}", status_code=204)
async def delete_step(step_id: int, db: DbSession, _: AdminUser):
    if not await ScenarioStepRepository(db).delete(step_id):
        raise HTTPException(status_code=404, detail="Step not found")
