# boutique/db/functions/users.py
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from boutique.db.database import commit_or_raise
from boutique.db.models import RoleEnum, User
from boutique.errors import ConflictError, NotFoundError

logger = logging.getLogger("boutique.users")

DUPLICATE_EMAIL_MESSAGE = "A user with this email already exists"


# Get a user by ID
async def get_user_by_id(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(select(User).filter(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise NotFoundError("User not found")
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalar_one_or_none()


async def count_users(db: AsyncSession) -> int:
    return await db.scalar(select(func.count()).select_from(User)) or 0


# Create a new user
async def create_user(db: AsyncSession, name: str, email: str, hashed_password: str,
                      role: RoleEnum = RoleEnum.customer) -> User:
    if await get_user_by_email(db, email):
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

    db_user = User(name=name, email=email, hashed_password=hashed_password, role=role)
    db.add(db_user)
    try:
        await commit_or_raise(db, "create_user")
    except IntegrityError:
        # another request registered the same email between the check and the insert
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
    await db.refresh(db_user)
    logger.info("User %s registered with role %s", db_user.id, db_user.role.value)
    return db_user


# Update the user profile
async def update_profile(db: AsyncSession, user_id: str, changes: dict) -> User:
    db_user = await get_user_by_id(db, user_id)
    for key, value in changes.items():
        setattr(db_user, key, value)
    await commit_or_raise(db, "update_profile")
    await db.refresh(db_user)
    return db_user
