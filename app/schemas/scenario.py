"""Pydantic schemas for levels, scenarios and their steps."""
from pydantic import BaseModel, Field, field_validator

CORRECT_ACTION_PATTERN = r"^[A-Da-d]$"


def reject_null(value):
    """Partial updates may omit a required column but not set it to null."""
    if value is None:
        raise ValueError("may not be null")
    return value


class LevelOutSchema(BaseModel):
    id: int
    title: str
    description: str | None = None

    class Config:
        from_attributes = True


class LevelInSchema(BaseModel):
    id: int = Field(ge=1)
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None


class LevelUpdateSchema(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None

    @field_validator("title")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class StepOutSchema(BaseModel):
    """Learner view of a step: the answer and its feedback stay hidden until submission."""

    id: int
    step_order: int
    prompt: str
    options: dict[str, str]

    class Config:
        from_attributes = True


class StepAdminOutSchema(StepOutSchema):
    scenario_id: int
    correct_action: str
    feedback: str | None = None


class StepInSchema(BaseModel):
    step_order: int = Field(ge=1)
    prompt: str = Field(min_length=1)
    options: dict[str, str] = Field(default_factory=dict)
    correct_action: str = Field(pattern=CORRECT_ACTION_PATTERN)
    feedback: str | None = None


class StepUpdateSchema(BaseModel):
    step_order: int | None = Field(default=None, ge=1)
    prompt: str | None = Field(default=None, min_length=1)
    options: dict[str, str] | None = None
    correct_action: str | None = Field(default=None, pattern=CORRECT_ACTION_PATTERN)
    feedback: str | None = None

    @field_validator("step_order", "prompt", "options", "correct_action")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class ScenarioOutSchema(BaseModel):
    id: int
    level_id: int
    title: str
    description: str | None = None
    media_url: str | None = None

    class Config:
        from_attributes = True


class ScenarioDetailSchema(ScenarioOutSchema):
    steps: list[StepOutSchema]


class ScenarioInSchema(BaseModel):
    level_id: int = Field(ge=1)
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    media_url: str | None = Field(default=None, max_length=512)


class ScenarioUpdateSchema(BaseModel):
    level_id: int | None = Field(default=None, ge=1)
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    media_url: str | None = Field(default=None, max_length=512)

    @field_validator("level_id", "title")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)
