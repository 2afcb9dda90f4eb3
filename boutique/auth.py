# boutique/auth.py
"""Registration, login and token checks on top of the user store."""
import logging
from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from boutique.auth_utils import create_access_token, decode_access_token, dummy_verify, hash_password, verify_password
from boutique.config import Settings
from boutique.db.functions.users import create_user, get_user_by_email
from boutique.db.models import RoleEnum, User
from boutique.errors import ForbiddenError, UnauthorizedError

logger = logging.getLogger("boutique.auth")

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        {"userId": user.id, "email": user.email, "role": user.role.value},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(days=settings.access_token_expire_days),
    )


async def register_user(db: AsyncSession, settings: Settings, name: str, email: str, password: str,
                        role: RoleEnum = RoleEnum.customer) -> Tuple[User, str]:
    """Create the account and hand back a token for it; ConflictError on a taken email."""
    hashed_password = hash_password(password, rounds=settings.bcrypt_rounds)
    user = await create_user(db, name=name, email=email, hashed_password=hashed_password, role=role)
    return user, issue_token(user, settings)


async def login_user(db: AsyncSession, settings: Settings, email: str, password: str) -> Tuple[User, str]:
    user = await get_user_by_email(db, email)
    if user is None:
        dummy_verify(settings.bcrypt_rounds)
        logger.info("Login failed: unknown email")
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(password, user.hashed_password):
        logger.info("Login failed for user %s: wrong password", user.id)
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    logger.info("User %s logged in", user.id)
    return user, issue_token(user, settings)


def authenticate(token: Optional[str], settings: Settings) -> dict:
    if not token:
        raise UnauthorizedError("Access token required")
    return decode_access_token(token, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def authorize(claims: dict, required_role: RoleEnum) -> None:
    if claims.get("role") != required_role.value:
        raise ForbiddenError(f"{required_role.value.capitalize()} access required")
