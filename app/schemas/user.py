from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Dict, Any

from app.models.user import UserRole


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v):
        # bcrypt rejects secrets longer than 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return v


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: UserRole
    profile: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    profile: Optional[Dict[str, Any]] = None
