from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from ..models.user import UserRole


class UserBase(BaseModel):
    email: str


class UserCreate(UserBase):
    name: str
    password: str
    role: UserRole = UserRole.USER


class UserSignin(UserBase):
    password: str


class User(UserBase):
    id: str
    name: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenData(BaseModel):
    email: Optional[str] = None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
