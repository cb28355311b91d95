"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole
from app.schemas.users import UserPublic


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class AuthResponse(BaseModel):
    """Token plus the authenticated user (no password)."""

    token: str = Field(..., description="JWT access token")
    user: UserPublic


class CurrentUser(BaseModel):
    """Authenticated principal (id, email, role) for dependency injection."""

    id: int
    name: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True
