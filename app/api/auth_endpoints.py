"""Authentication endpoints: registration, cookie session login/logout, profile."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import get_settings
from app.core.db import get_db
from app.core.dependencies import get_current_user
from app.core.jwt import create_access_token
from app.models.user import User
from app.schemas.base import envelope
from app.schemas.user import UserCreate, UserRead, LoginRequest, ProfileUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await UserService(db).register(payload)
    return envelope("User created successfully", user=UserRead.model_validate(user))


@router.post("/login")
async def login_user(payload: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    user = await UserService(db).authenticate(payload.email, payload.password)
    security = get_settings().security
    token = create_access_token(str(user.id))
    response.set_cookie(
        key=security.cookie_name,
        value=token,
        httponly=True,
        secure=security.cookie_secure,
        samesite="lax",
        max_age=security.access_token_expire_minutes * 60,
    )
    return envelope("Login successful", user=UserRead.model_validate(user), access_token=token)


@router.post("/logout")
async def logout_user(response: Response):
    response.delete_cookie(get_settings().security.cookie_name)
    return envelope("Logged out successfully")


@router.get("/profile")
async def get_profile(current_user: User = Depends(get_current_user)):
    return envelope(user=UserRead.model_validate(current_user))


@router.put("/profile")
async def update_profile(
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = await UserService(db).update_profile(current_user, payload)
    return envelope("Profile updated successfully", user=UserRead.model_validate(user))
