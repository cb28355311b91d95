"""Pydantic request/response schemas."""

from app.schemas.auth import AuthResponse, CurrentUser, LoginRequest
from app.schemas.health import HealthResponse
from app.schemas.users import (
    PasswordUpdate,
    UserCreate,
    UserCreated,
    UserPublic,
    UserUpdate,
)

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "PasswordUpdate",
    "UserCreate",
    "UserCreated",
    "UserPublic",
    "UserUpdate",
]
