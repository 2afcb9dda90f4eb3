# boutique/routers/users.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.auth import login_user, register_user
from boutique.config import Settings
from boutique.db.database import get_db
from boutique.db.functions import get_user_by_id, update_profile
from boutique.db.schemas import AuthResponse, ProfileUpdate, User as UserSchema, UserCreate, UserLogin
from boutique.dependencies import get_current_user, get_settings

router = APIRouter(tags=["users"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db),
                   settings: Settings = Depends(get_settings)):
    user, token = await register_user(db, settings, payload.name, payload.email, payload.password)
    return AuthResponse(message="User created successfully", token=token, user=UserSchema.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db),
                settings: Settings = Depends(get_settings)):
    user, token = await login_user(db, settings, payload.email, payload.password)
    return AuthResponse(message="Login successful", token=token, user=UserSchema.model_validate(user))


@router.get("/profile", response_model=UserSchema)
async def get_profile(claims: dict = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Return the current user's profile."""
    user = await get_user_by_id(db, claims["userId"])
    return UserSchema.model_validate(user)


@router.put("/profile", response_model=UserSchema)
async def edit_profile(payload: ProfileUpdate, claims: dict = Depends(get_current_user),
                       db: AsyncSession = Depends(get_db)):
    changes = payload.model_dump(exclude_unset=True, by_alias=True)
    # address and phone may be cleared with null, the name may not
    if changes.get("name") is None:
        changes.pop("name", None)
    user = await update_profile(db, claims["userId"], changes)
    return UserSchema.model_validate(user)
