"""Scenario and ScenarioStep gateways."""
import json

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.models.scenario import Scenario
from app.models.scenario_step import ScenarioStep
from app.repositories.base import BaseRepository


class ScenarioRepository(BaseRepository):
    model = Scenario

    async def find_by_level(self, level_id: int) -> list[Scenario]:
        result = await self.db.execute(
            select(Scenario).where(Scenario.level_id == level_id).order_by(Scenario.id)
        )
        return list(result.scalars().all())

    async def find_with_steps(self, scenario_id: int) -> Scenario | None:
        result = await self.db.execute(
            select(Scenario)
            .where(Scenario.id == scenario_id)
            .options(selectinload(Scenario.steps))
        )
        return result.scalar_one_or_none()

    async def count_scenarios_in_level(self, level_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Scenario.id)).where(Scenario.level_id == level_id)
        )
        return result.scalar_one()


class ScenarioStepRepository(BaseRepository):
    model = ScenarioStep

    async def find_by_scenario(self, scenario_id: int) -> list[ScenarioStep]:
        """Steps of a scenario in storage order; callers sort by step_order."""
        result = await self.db.execute(
            select(ScenarioStep).where(ScenarioStep.scenario_id == scenario_id)
        )
        return list(result.scalars().all())

    async def create(self, **data) -> ScenarioStep:
        if "options" in data:
            data["options_json"] = json.dumps(data.pop("options") or {}, ensure_ascii=False)
        data["correct_action"] = data["correct_action"].upper()
        return await super().create(**data)

    async def update(self, obj_id: int, **data) -> ScenarioStep | None:
        if "options" in data:
            data["options_json"] = json.dumps(data.pop("options") or {}, ensure_ascii=False)
        if data.get("correct_action"):
            data["correct_action"] = data["correct_action"].upper()
        return await super().update(obj_id, **data)
