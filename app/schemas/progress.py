"""Pydantic schemas for attempts, level progress and badges."""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.scenario import reject_null


class AttemptOutSchema(BaseModel):
    id: int
    user_id: int
    scenario_id: int
    score: int
    all_correct: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class StepAttemptOutSchema(BaseModel):
    step_id: int
    step_order: int
    chosen_action: str | None = None
    is_correct: bool

    class Config:
        from_attributes = True


class UserLevelOutSchema(BaseModel):
    level_id: int
    unlocked: bool
    completed: bool

    class Config:
        from_attributes = True


class BadgeOutSchema(BaseModel):
    id: int
    level_id: int
    name: str
    description: str | None = None
    icon_url: str | None = None

    class Config:
        from_attributes = True


class BadgeInSchema(BaseModel):
    level_id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=128)
    description: str | None = None
    icon_url: str | None = Field(default=None, max_length=512)


class BadgeUpdateSchema(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=128)
    description: str | None = None
    icon_url: str | None = Field(default=None, max_length=512)

    @field_validator("name")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class UserBadgeInSchema(BaseModel):
    badge_id: int = Field(ge=1)


class AwardedBadgeSchema(BaseModel):
    badge_id: int
    name: str
    description: str | None = None
    icon_url: str | None = None


class UserBadgeOutSchema(BaseModel):
    badge_id: int
    earned_at: datetime | None = None
    badge: BadgeOutSchema

    class Config:
        from_attributes = True
