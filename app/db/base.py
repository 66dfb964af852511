"""SQLAlchemy declarative base and model imports for Alembic."""
from app.db.session import Base

# Import all models so Alembic can see them
from app.models.attempt import Attempt  # noqa: F401
from app.models.badge import Badge  # noqa: F401
from app.models.level import Level  # noqa: F401
from app.models.scenario import Scenario  # noqa: F401
from app.models.scenario_step import ScenarioStep  # noqa: F401
from app.models.step_attempt import StepAttempt  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.user_badge import UserBadge  # noqa: F401
from app.models.user_level import UserLevel  # noqa: F401

__all__ = [
    "Base",
    "User",
    "Level",
    "Scenario",
    "ScenarioStep",
    "Attempt",
    "StepAttempt",
    "Badge",
    "UserBadge",
    "UserLevel",
]
