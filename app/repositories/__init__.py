from app.repositories.attempt import AttemptRepository, StepAttemptRepository
from app.repositories.progress import (
    BadgeRepository,
    LevelRepository,
    UserBadgeRepository,
    UserLevelRepository,
)
from app.repositories.scenario import ScenarioRepository, ScenarioStepRepository
from app.repositories.user import UserRepository

__all__ = [
    "AttemptRepository",
    "StepAttemptRepository",
    "BadgeRepository",
    "LevelRepository",
    "UserBadgeRepository",
    "UserLevelRepository",
    "ScenarioRepository",
    "ScenarioStepRepository",
    "UserRepository",
]
