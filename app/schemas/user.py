from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(min_length=1)
    # admins are bootstrapped, never self-registered
    role: Literal["buyer", "vendor"] = "buyer"


class LoginRequest(UserBase):
    password: str


class UserResponse(UserBase):
    id: str
    role: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    id: str
    email: EmailStr
    role: str
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenData(BaseModel):
    user_id: Optional[str] = None
    role: Optional[str] = None
