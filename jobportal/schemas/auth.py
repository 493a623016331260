from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import Optional
from jobportal.models.user import UserRole
from datetime import datetime


class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class RegisterRequest(UserBase):
    password: str = Field(min_length=6)
    role: UserRole = UserRole.JOB_SEEKER


class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    role: UserRole
    resume_id: Optional[int] = None
    created_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse
