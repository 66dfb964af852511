from app.models.user import User
from app.models.level import Level
from app.models.scenario import Scenario
from app.models.scenario_step import ScenarioStep
from app.models.attempt import Attempt
from app.models.step_attempt import StepAttempt
from app.models.badge import Badge
from app.models.user_badge import UserBadge
from app.models.user_level import UserLevel

__all__ = [
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
