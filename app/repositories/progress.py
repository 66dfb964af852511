"""Level, UserLevel, Badge and UserBadge gateways."""
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.models.badge import Badge
from app.models.level import Level
from app.models.user_badge import UserBadge
from app.models.user_level import UserLevel
from app.repositories.base import BaseRepository


class LevelRepository(BaseRepository):
    model = Level

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Level.id)))
        return result.scalar_one()


class UserLevelRepository(BaseRepository):
    model = UserLevel

    async def find_by_user(self, user_id: int) -> list[UserLevel]:
        result = await self.db.execute(
            select(UserLevel).where(UserLevel.user_id == user_id).order_by(UserLevel.level_id)
        )
        return list(result.scalars().all())

    async def find_by_user_and_level(self, user_id: int, level_id: int) -> UserLevel | None:
        result = await self.db.execute(
            select(UserLevel).where(UserLevel.user_id == user_id, UserLevel.level_id == level_id)
        )
        return result.scalar_one_or_none()

    async def upsert_progress(self, user_id: int, level_id: int, unlocked: bool, completed: bool) -> UserLevel:
        """Set both flags for (user, level), creating the row if needed."""
        stmt = self.upsert().values(
            user_id=user_id, level_id=level_id, unlocked=unlocked, completed=completed
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserLevel.user_id, UserLevel.level_id],
            set_={"unlocked": stmt.excluded.unlocked, "completed": stmt.excluded.completed},
        )
        return await self._returning(stmt)

    async def unlock(self, user_id: int, level_id: int) -> UserLevel:
        """Mark (user, level) unlocked; an existing completed flag is left alone."""
        stmt = self.upsert().values(user_id=user_id, level_id=level_id, unlocked=True, completed=False)
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserLevel.user_id, UserLevel.level_id],
            set_={"unlocked": True},
        )
        return await self._returning(stmt)

    async def _returning(self, stmt) -> UserLevel:
        result = await self.db.scalars(
            stmt.returning(UserLevel),
            execution_options={"populate_existing": True},
        )
        row = result.one()
        await self.db.commit()
        return row


class BadgeRepository(BaseRepository):
    model = Badge

    async def find_by_level(self, level_id: int) -> Badge | None:
        result = await self.db.execute(select(Badge).where(Badge.level_id == level_id))
        return result.scalars().first()


class UserBadgeRepository(BaseRepository):
    model = UserBadge

    async def find_by_user(self, user_id: int) -> list[UserBadge]:
        result = await self.db.execute(
            select(UserBadge)
            .where(UserBadge.user_id == user_id)
            .options(selectinload(UserBadge.badge))
            .order_by(UserBadge.badge_id)
        )
        return list(result.scalars().all())

    async def find_by_user_and_badge(self, user_id: int, badge_id: int) -> UserBadge | None:
        result = await self.db.execute(
            select(UserBadge)
            .where(UserBadge.user_id == user_id, UserBadge.badge_id == badge_id)
            .options(selectinload(UserBadge.badge))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def revoke(self, user_id: int, badge_id: int) -> bool:
        user_badge = await self.find_by_user_and_badge(user_id, badge_id)
        if user_badge is None:
            return False
        await self.db.delete(user_badge)
        await self._commit()
        return True

    async def create_if_absent(self, user_id: int, badge_id: int) -> UserBadge | None:
        """Award the badge; returns None when the user already holds it."""
        stmt = self.upsert().values(user_id=user_id, badge_id=badge_id)
        stmt = stmt.on_conflict_do_nothing(index_elements=[UserBadge.user_id, UserBadge.badge_id])
        result = await self.db.scalars(stmt.returning(UserBadge))
        row = result.one_or_none()
        await self.db.commit()
        return row
