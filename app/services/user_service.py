"""
User Service - registration, credential checks and profile updates
"""
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.exceptions import AuthenticationError, ConflictError
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.schemas.user import UserCreate, ProfileUpdate

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def register(self, data: UserCreate) -> User:
        if await self.get_by_email(data.email):
            raise ConflictError("User already exists", {"email": data.email})

        user = User(
            name=data.name,
            email=data.email.lower(),
            hashed_password=hash_password(data.password),
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        user = await self.get_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid credentials")
        return user

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        if data.name is not None:
            user.name = data.name
        if data.profile is not None:
            user.profile = data.profile
        await self.db.commit()
        await self.db.refresh(user)
        return user
