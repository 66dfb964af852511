"""Scenario routes: browsing, admin CRUD, steps, and answer submission."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import AdminUser, DbSession, OptionalUser, get_submission_service
from app.repositories import ScenarioRepository, ScenarioStepRepository
from app.schemas.scenario import (
    ScenarioDetailSchema,
    ScenarioInSchema,
    ScenarioOutSchema,
    ScenarioUpdateSchema,
    StepAdminOutSchema,
    StepInSchema,
)
from app.schemas.submission import SubmissionOutSchema, SubmitSchema
from app.services.submission import SubmissionService

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


@router.get("", response_model=list[ScenarioOutSchema])
async def list_scenarios(db: DbSession):
    return await ScenarioRepository(db).find_all()


@router.get("/level/{level_id}", response_model=list[ScenarioOutSchema])
async def list_scenarios_by_level(level_id: int, db: DbSession):
    return await ScenarioRepository(db).find_by_level(level_id)


@router.get("/{scenario_id}", response_model=ScenarioDetailSchema)
async def get_scenario(scenario_id: int, db: DbSession):
    """One scenario with its steps ordered by step_order (answers hidden)."""
    scenario = await ScenarioRepository(db).find_with_steps(scenario_id)
    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario


@router.post("/{scenario_id}/submit", response_model=SubmissionOutSchema, response_model_exclude_unset=True)
async def submit_scenario(
    scenario_id: int,
    body: SubmitSchema,
    current_user: OptionalUser,
    submissions: Annotated[SubmissionService, Depends(get_submission_service)],
):
    """Grade answers; signed-in users also get best score, level progress and badges updated."""
    user_id = current_user.id if current_user else None
    return await submissions.submit(scenario_id, body.user_answers, user_id=user_id)


# ---------- admin ----------

@router.post("", response_model=ScenarioOutSchema, status_code=201)
async def create_scenario(body: ScenarioInSchema, db: DbSession, _: AdminUser):
    return await ScenarioRepository(db).create(**body.model_dump())


@router.put("/{scenario_id}", response_model=ScenarioOutSchema)
async def update_scenario(scenario_id: int, body: ScenarioUpdateSchema, db: DbSession, _: AdminUser):
    scenario = await ScenarioRepository(db).update(scenario_id, **body.model_dump(exclude_unset=True))
    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario


@router.delete("/{scenario_id}", status_code=204)
async def delete_scenario(scenario_id: int, db: DbSession, _: AdminUser):
    if not await ScenarioRepository(db).delete(scenario_id):
        raise HTTPException(status_code=404, detail="Scenario not found")


@router.get("/{scenario_id}/steps", response_model=list[StepAdminOutSchema])
async def list_steps(scenario_id: int, db: DbSession, _: AdminUser):
    steps = await ScenarioStepRepository(db).find_by_scenario(scenario_id)
    return sorted(steps, key=lambda s: s.step_order)


@router.post("/{scenario_id}/steps", response_model=StepAdminOutSchema, status_code=201)
async def create_step(scenario_id: int, body: StepInSchema, db: DbSession, _: AdminUser):
    if not await ScenarioRepository(db).find_by_id(scenario_id):
        raise HTTPException(status_code=404, detail="Scenario not found")
    return await ScenarioStepRepository(db).create(scenario_id=scenario_id, **body.model_dump())
