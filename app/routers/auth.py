"""Auth routes: register, login, current user. Bearer JWT auth."""
from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import CurrentUser, get_auth_service
from app.schemas.user import LoginSchema, RegisterSchema, TokenOutSchema, UserOutSchema
from app.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOutSchema, status_code=201)
async def register(
    body: RegisterSchema,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Create an account; the first level starts unlocked."""
    return await auth.register(body.email, body.username, body.password)


@router.post("/login", response_model=TokenOutSchema)
async def login(
    body: LoginSchema,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    return await auth.login(body.email, body.password)


@router.get("/me", response_model=UserOutSchema)
async def me(current_user: CurrentUser):
    return current_user
