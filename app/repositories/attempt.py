"""Attempt and StepAttempt gateways."""
from sqlalchemy import case, delete, func, or_, select

from app.models.attempt import Attempt
from app.models.scenario import Scenario
from app.models.step_attempt import StepAttempt
from app.repositories.base import BaseRepository
from app.schemas.submission import StepResultSchema


class AttemptRepository(BaseRepository):
    model = Attempt

    async def find_by_user_and_scenario(self, user_id: int, scenario_id: int) -> Attempt | None:
        result = await self.db.execute(
            select(Attempt).where(Attempt.user_id == user_id, Attempt.scenario_id == scenario_id)
        )
        return result.scalar_one_or_none()

    async def find_by_user(self, user_id: int) -> list[Attempt]:
        result = await self.db.execute(
            select(Attempt).where(Attempt.user_id == user_id).order_by(Attempt.scenario_id)
        )
        return list(result.scalars().all())

    async def find_by_user_in_level(self, user_id: int, level_id: int) -> list[Attempt]:
        result = await self.db.execute(
            select(Attempt)
            .join(Scenario, Scenario.id == Attempt.scenario_id)
            .where(Attempt.user_id == user_id, Scenario.level_id == level_id)
            .order_by(Attempt.scenario_id)
        )
        return list(result.scalars().all())

    async def upsert_best_score(self, user_id: int, scenario_id: int, score: int, all_correct: bool) -> Attempt:
        """Insert or raise the (user, scenario) best score in one statement.

        A lower score never replaces a higher one and all_correct never goes back to False.
        """
        stmt = self.upsert().values(
            user_id=user_id,
            scenario_id=scenario_id,
            score=score,
            all_correct=all_correct,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Attempt.user_id, Attempt.scenario_id],
            set_={
                "score": case((stmt.excluded.score > Attempt.score, stmt.excluded.score), else_=Attempt.score),
                "all_correct": or_(Attempt.all_correct, stmt.excluded.all_correct),
                "updated_at": func.now(),
            },
        )
        result = await self.db.scalars(
            stmt.returning(Attempt),
            execution_options={"populate_existing": True},
        )
        attempt = result.one()
        await self.db.commit()
        return attempt

    async def count_perfect_by_user_in_level(self, user_id: int, level_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Attempt.id))
            .join(Scenario, Scenario.id == Attempt.scenario_id)
            .where(
                Attempt.user_id == user_id,
                Scenario.level_id == level_id,
                Attempt.all_correct.is_(True),
            )
        )
        return result.scalar_one()


class StepAttemptRepository(BaseRepository):
    model = StepAttempt

    async def find_by_attempt(self, attempt_id: int) -> list[StepAttempt]:
        result = await self.db.execute(
            select(StepAttempt)
            .where(StepAttempt.attempt_id == attempt_id)
            .order_by(StepAttempt.step_order)
        )
        return list(result.scalars().all())

    async def replace_for_attempt(self, attempt_id: int, results: list[StepResultSchema]) -> list[StepAttempt]:
        """Swap the attempt's step rows for these results in a single commit."""
        await self.db.execute(delete(StepAttempt).where(StepAttempt.attempt_id == attempt_id))
        rows = [
            StepAttempt(
                attempt_id=attempt_id,
                step_id=r.step_id,
                step_order=r.step_order,
                chosen_action=r.picked,
                is_correct=r.is_correct,
            )
            for r in results
            if r.step_id is not None
        ]
        self.db.add_all(rows)
        await self.db.commit()
        return rows
