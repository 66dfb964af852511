"""Registration and login."""
import logging
import re

from app.core.config import Settings
from app.core.errors import Conflict, InvalidInput, Unauthorized
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.repositories import UserLevelRepository, UserRepository
from app.schemas.user import TokenOutSchema, UserOutSchema

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt hard limit


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class AuthService:
    def __init__(self, users: UserRepository, user_levels: UserLevelRepository, settings: Settings):
        self.users = users
        self.user_levels = user_levels
        self.settings = settings

    async def register(self, email: str, username: str, password: str, role: str = "user") -> User:
        email_norm = normalize_email(email)
        pwd = password or ""

        if not EMAIL_RE.match(email_norm):
            raise InvalidInput("Invalid email address")
        if len(pwd) < MIN_PASSWORD_LENGTH:
            raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if len(pwd.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        if await self.users.find_by_email(email_norm):
            raise Conflict("Email already in use")

        user = await self.users.create(
            email=email_norm,
            username=username.strip(),
            hashed_password=hash_password(pwd),
            role=role,
        )
        # The first level is open to everyone
        await self.user_levels.unlock(user.id, self.settings.first_level_id)
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, email: str, password: str) -> TokenOutSchema:
        user = await self.users.find_by_email(normalize_email(email))
        if not user or not verify_password(password, user.hashed_password):
            raise Unauthorized("Invalid email or password")

        token = create_access_token(user.id, extra={"role": user.role})
        return TokenOutSchema(user=UserOutSchema.model_validate(user), access_token=token)
