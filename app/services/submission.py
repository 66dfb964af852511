"""Scenario submission: look up, grade, and record progress for signed-in users."""
import logging
from typing import Any

from app.core.errors import NotFound
from app.repositories import ScenarioRepository, ScenarioStepRepository
from app.schemas.scenario import ScenarioOutSchema
from app.schemas.submission import SubmissionOutSchema
from app.services.grading import ensure_answer_list, grade_answers
from app.services.progression import ProgressionCoordinator

logger = logging.getLogger(__name__)


class SubmissionService:
    def __init__(
        self,
        scenarios: ScenarioRepository,
        steps: ScenarioStepRepository,
        coordinator: ProgressionCoordinator,
    ):
        self.scenarios = scenarios
        self.steps = steps
        self.coordinator = coordinator

    async def submit(self, scenario_id: int, answers: Any, user_id: int | None = None) -> SubmissionOutSchema:
        """Grade answers for a scenario.

        Guests (user_id None) get a score only; nothing is written and the
        progress fields are left unset in the response.
        """
        ensure_answer_list(answers)

        scenario = await self.scenarios.find_by_id(scenario_id)
        if scenario is None:
            raise NotFound("Scenario not found")

        steps = await self.steps.find_by_scenario(scenario_id)
        grading = grade_answers(steps, answers)

        result: dict[str, Any] = {
            "score": grading.score,
            "all_correct": grading.all_correct,
            "level_id": scenario.level_id,
            "scenario_id": scenario.id,
            "correct_count": grading.correct_count,
            "total_steps": grading.total_steps,
            "step_results": grading.steps,
        }

        if user_id is None:
            logger.info("Guest submission for scenario %s scored %s", scenario_id, grading.score)
            return SubmissionOutSchema(**result)

        outcome = await self.coordinator.record_submission(user_id, scenario, grading)
        logger.info(
            "User %s scored %s on scenario %s (best %s)",
            user_id, grading.score, scenario_id, outcome.attempt.score,
        )

        result["level_progress"] = outcome.level_progress
        if outcome.awarded_badge is not None:
            result["awarded_badge"] = outcome.awarded_badge

        refreshed = await self.scenarios.find_by_id(scenario_id)
        result["updated_scenario"] = ScenarioOutSchema.model_validate(refreshed)
        return SubmissionOutSchema(**result)
