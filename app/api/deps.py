"""Service providers for FastAPI dependency injection."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import PasswordHasher, TokenService, get_password_hasher, get_token_service
from app.services.auth import AuthService
from app.services.users import UsersService


def provide_password_hasher() -> PasswordHasher:
    return get_password_hasher()


def provide_token_service() -> TokenService:
    return get_token_service()


def get_users_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(provide_password_hasher)],
) -> UsersService:
    """Request-scoped UsersService bound to the request's DB session."""
    return UsersService(db, hasher)


def get_auth_service(
    users: Annotated[UsersService, Depends(get_users_service)],
    hasher: Annotated[PasswordHasher, Depends(provide_password_hasher)],
    tokens: Annotated[TokenService, Depends(provide_token_service)],
) -> AuthService:
    return AuthService(users, hasher, tokens)
