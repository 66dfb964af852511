"""Pydantic schemas for scenario submission: request, grading result, response."""
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.progress import AwardedBadgeSchema
from app.schemas.scenario import ScenarioOutSchema


class SubmitSchema(BaseModel):
    # Shape is checked by the grading engine so a non-list answers a 400, not a 422.
    user_answers: Any = Field(default=None, validation_alias=AliasChoices("userAnswers", "answers"))


class StepResultSchema(BaseModel):
    step_id: int | None = None
    step_order: int
    picked: str | None
    correct_action: str
    is_correct: bool
    feedback: str | None = None


class GradingResultSchema(BaseModel):
    score: int  # 0-100
    all_correct: bool
    correct_count: int
    total_steps: int
    steps: list[StepResultSchema]


class LevelCompletedSchema(BaseModel):
    level_id: int
    completed: Literal[True]
    next_level_unlocked: int | None  # None once the max level is reached


class LevelInProgressSchema(BaseModel):
    level_id: int
    completed: Literal[False]
    perfect_in_level: int
    total_in_level: int


class SubmissionOutSchema(BaseModel):
    """Guest submissions leave level_progress, awarded_badge and updated_scenario unset."""

    score: int
    all_correct: bool
    level_id: int
    scenario_id: int
    correct_count: int
    total_steps: int
    step_results: list[StepResultSchema]
    level_progress: LevelCompletedSchema | LevelInProgressSchema | None = None
    awarded_badge: AwardedBadgeSchema | None = None
    updated_scenario: ScenarioOutSchema | None = None
