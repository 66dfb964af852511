"""Apply a graded submission to a user's stored progress.

record_submission runs five steps in order. Each step is idempotent and
commits on its own, so a retried submission converges on the same state.
There is no enclosing transaction: if a step fails, the earlier steps stay
applied and the failure surfaces as PersistenceFailure. Nothing is rolled back.

    save_best_score      upsert (user, scenario) keeping the higher score
    evaluate_level       recount perfect attempts vs. scenarios in the level
    save_level_progress  upsert (user, level) unlocked, completed=<recount>
    unlock_next_level    completed, below max_level and level + 1 exists: unlock it
    award_badge          completed: insert-if-absent (user, level badge)
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import PersistenceFailure
from app.models.attempt import Attempt
from app.models.badge import Badge
from app.models.scenario import Scenario
from app.repositories import (
    AttemptRepository,
    BadgeRepository,
    LevelRepository,
    ScenarioRepository,
    StepAttemptRepository,
    UserBadgeRepository,
    UserLevelRepository,
)
from app.schemas.progress import AwardedBadgeSchema
from app.schemas.submission import GradingResultSchema, LevelCompletedSchema, LevelInProgressSchema

logger = logging.getLogger(__name__)


@dataclass
class SubmissionOutcome:
    attempt: Attempt
    level_progress: LevelCompletedSchema | LevelInProgressSchema
    awarded_badge: AwardedBadgeSchema | None = None


def is_level_completed(perfect_in_level: int, total_in_level: int) -> bool:
    """A level with no scenarios can never be completed."""
    return total_in_level > 0 and perfect_in_level == total_in_level


class ProgressionCoordinator:
    def __init__(
        self,
        attempts: AttemptRepository,
        step_attempts: StepAttemptRepository,
        scenarios: ScenarioRepository,
        levels: LevelRepository,
        user_levels: UserLevelRepository,
        badges: BadgeRepository,
        user_badges: UserBadgeRepository,
        max_level: int,
    ):
        self.attempts = attempts
        self.step_attempts = step_attempts
        self.scenarios = scenarios
        self.levels = levels
        self.user_levels = user_levels
        self.badges = badges
        self.user_badges = user_badges
        self.max_level = max_level

    @asynccontextmanager
    async def _step(self, name: str, user_id: int, scenario_id: int):
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception(
                "Submission step %s failed (user=%s scenario=%s); earlier steps remain applied",
                name, user_id, scenario_id,
            )
            raise PersistenceFailure(name, str(exc)) from exc

    async def record_submission(
        self,
        user_id: int,
        scenario: Scenario,
        grading: GradingResultSchema,
    ) -> SubmissionOutcome:
        level_id = scenario.level_id

        async with self._step("save_best_score", user_id, scenario.id):
            attempt = await self.save_best_score(user_id, scenario.id, grading)

        async with self._step("evaluate_level", user_id, scenario.id):
            perfect_in_level = await self.attempts.count_perfect_by_user_in_level(user_id, level_id)
            total_in_level = await self.scenarios.count_scenarios_in_level(level_id)
        completed = is_level_completed(perfect_in_level, total_in_level)

        async with self._step("save_level_progress", user_id, scenario.id):
            await self.user_levels.upsert_progress(user_id, level_id, unlocked=True, completed=completed)

        if not completed:
            return SubmissionOutcome(
                attempt=attempt,
                level_progress=LevelInProgressSchema(
                    level_id=level_id,
                    completed=False,
                    perfect_in_level=perfect_in_level,
                    total_in_level=total_in_level,
                ),
            )

        async with self._step("unlock_next_level", user_id, scenario.id):
            next_level_id = await self.unlock_next_level(user_id, level_id)

        async with self._step("award_badge", user_id, scenario.id):
            badge = await self.award_badge(user_id, level_id)

        return SubmissionOutcome(
            attempt=attempt,
            level_progress=LevelCompletedSchema(
                level_id=level_id,
                completed=True,
                next_level_unlocked=next_level_id,
            ),
            awarded_badge=badge,
        )

    async def save_best_score(self, user_id: int, scenario_id: int, grading: GradingResultSchema) -> Attempt:
        attempt = await self.attempts.upsert_best_score(
            user_id, scenario_id, score=grading.score, all_correct=grading.all_correct
        )
        # Step rows describe the answers behind the stored best score
        if attempt.score == grading.score:
            await self.step_attempts.replace_for_attempt(attempt.id, grading.steps)
        return attempt

    async def unlock_next_level(self, user_id: int, level_id: int) -> int | None:
        if level_id >= self.max_level:
            return None
        next_level_id = level_id + 1
        if await self.levels.find_by_id(next_level_id) is None:
            logger.info("Level %s completed but level %s does not exist yet", level_id, next_level_id)
            return None
        await self.user_levels.unlock(user_id, next_level_id)
        logger.info("User %s unlocked level %s", user_id, next_level_id)
        return next_level_id

    async def award_badge(self, user_id: int, level_id: int) -> AwardedBadgeSchema | None:
        """Award the level badge if it exists and the user does not hold it yet."""
        badge: Badge | None = await self.badges.find_by_level(level_id)
        if badge is None:
            return None
        awarded = await self.user_badges.create_if_absent(user_id, badge.id)
        if awarded is None:
            return None
        logger.info("User %s earned badge %s (%s)", user_id, badge.id, badge.name)
        return AwardedBadgeSchema(
            badge_id=badge.id,
            name=badge.name,
            description=badge.description,
            icon_url=badge.icon_url,
        )
