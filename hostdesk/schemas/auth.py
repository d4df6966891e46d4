"""Authentication schemas"""

from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator


class LoginRequest(BaseModel):
    """Login request"""
    email: EmailStr
    password: str


class AuthUser(BaseModel):
    """Logged-in staff member as returned by the restaurant API"""
    id: str
    email: str
    name: Optional[str] = None
    role: Optional[str] = None  # staff, admin, customer

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value)

    @property
    def is_staff(self) -> bool:
        return self.role in ("staff", "admin")


class LoginResponse(BaseModel):
    """Restaurant API login response"""
    jwt: str
    user: AuthUser


class SessionResponse(BaseModel):
    """Current staff session"""
    authenticated: bool
    user: Optional[AuthUser] = None
