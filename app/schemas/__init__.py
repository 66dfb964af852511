from app.schemas.progress import (
    AttemptOutSchema,
    AwardedBadgeSchema,
    BadgeOutSchema,
    UserBadgeOutSchema,
    UserLevelOutSchema,
)
from app.schemas.scenario import LevelOutSchema, ScenarioDetailSchema, ScenarioOutSchema, StepOutSchema
from app.schemas.submission import GradingResultSchema, SubmissionOutSchema, SubmitSchema
from app.schemas.user import TokenOutSchema, UserOutSchema

__all__ = [
    "AttemptOutSchema",
    "AwardedBadgeSchema",
    "BadgeOutSchema",
    "UserBadgeOutSchema",
    "UserLevelOutSchema",
    "LevelOutSchema",
    "ScenarioDetailSchema",
    "ScenarioOutSchema",
    "StepOutSchema",
    "GradingResultSchema",
    "SubmissionOutSchema",
    "SubmitSchema",
    "TokenOutSchema",
    "UserOutSchema",
]
