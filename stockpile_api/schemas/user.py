from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from stockpile_api.models.users import Role


# Schema for user authentication credentials
class UserLogin(BaseModel):
    email: EmailStr
    password: str


# Schema for account creation; the email must be one login will accept
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Role = Role.WORKER


# Sanitized user returned alongside a fresh token
class UserPublic(BaseModel):
    id: int
    email: str
    name: str
    role: str

    model_config = ConfigDict(from_attributes=True)


# Output schema for the authenticated user's profile
class UserResponse(UserPublic):
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    token: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str
