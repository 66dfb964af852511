"""Pydantic schemas for registration, login, the current user and admin user management."""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.scenario import reject_null

ROLE_PATTERN = r"^(user|admin)$"


class RegisterSchema(BaseModel):
    email: str = Field(max_length=255)
    username: str = Field(min_length=1, max_length=64)
    password: str


class UserCreateSchema(RegisterSchema):
    role: str = Field(default="user", pattern=ROLE_PATTERN)


class UserUpdateSchema(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=64)
    role: str | None = Field(default=None, pattern=ROLE_PATTERN)

    @field_validator("username", "role")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class LoginSchema(BaseModel):
    email: str
    password: str


class UserOutSchema(BaseModel):
    id: int
    email: str
    username: str
    role: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class TokenOutSchema(BaseModel):
    user: UserOutSchema
    access_token: str
    token_type: str = "bearer"
