"""Request/response schemas for user management endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.user import UserRole

NAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128


class UserCreate(BaseModel):
    """Body for POST /users. role other than user needs an admin bearer token."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., description="Unique email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Plain password")
    role: UserRole | None = Field(default=None, description="Defaults to user")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must be non-empty")
        return v.strip()


class UserUpdate(BaseModel):
    """Body for PATCH /users/{user_id}; only the fields sent are applied."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    email: EmailStr | None = None
    role: UserRole | None = None
    password: str | None = Field(default=None, min_length=1, max_length=PASSWORD_MAX_LEN)


class PasswordUpdate(BaseModel):
    """Body for PATCH /users/{user_id}/password."""

    model_config = ConfigDict(populate_by_name=True)

    new_password: str = Field(..., alias="newPassword", min_length=1, max_length=PASSWORD_MAX_LEN)
    current_password: str = Field(..., alias="currentPassword", min_length=1, max_length=PASSWORD_MAX_LEN)


class UserPublic(BaseModel):
    """User without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole


class UserCreated(UserPublic):
    """Response for POST /users; includes the stored hash."""

    password: str
