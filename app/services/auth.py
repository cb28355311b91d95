"""Authentication: password login and token-based session resumption (rolling session)."""

import logging
from dataclasses import dataclass
from typing import Any

import jwt

from app.core.exceptions import NotFoundError, UnauthorizedError
from app.core.security import PasswordHasher, TokenService
from app.models.user import User
from app.schemas.auth import CurrentUser
from app.services.users import UsersService, to_public

logger = logging.getLogger(__name__)

INCORRECT_PASSWORD_MESSAGE = "Senha incorreta."
LOGIN_FAILED_MESSAGE = "Erro ao fazer login"
INVALID_TOKEN_MESSAGE = "Token inválido ou expirado"


@dataclass(frozen=True)
class AuthResult:
    """Issued token and the user it was issued for (no password)."""

    token: str
    user: dict[str, Any]


class AuthService:
    """Verifies credentials or tokens and issues fresh tokens."""

    def __init__(
        self,
        users: UsersService,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def login(self, email: str, password: str) -> AuthResult:
        """
        Check email and password and issue a token.

        Raises NotFoundError for an unknown email and UnauthorizedError for a
        wrong password. Any other failure is logged and narrowed to a generic
        UnauthorizedError so internal details never leave this boundary.
        """
        try:
            user = self.users.find_one_by_email(email)
            if user is None:
                raise NotFoundError()
            if not self.hasher.verify(password, user.password):
                logger.info("Login rejected: incorrect password", extra={"user_id": user.id})
                raise UnauthorizedError(INCORRECT_PASSWORD_MESSAGE)
            return self._issue(user)
        except (NotFoundError, UnauthorizedError):
            raise
        except Exception as e:
            logger.exception("Unexpected error during login")
            raise UnauthorizedError(LOGIN_FAILED_MESSAGE) from e

    def login_with_jwt(self, token: str) -> AuthResult:
        """Verify a previously issued token, reload its user and issue a new token."""
        user = self._user_from_token(token)
        return self._issue(user)

    def authenticate(self, token: str) -> CurrentUser:
        """Resolve a bearer token to the current principal without reissuing."""
        user = self._user_from_token(token)
        return CurrentUser.model_validate(user)

    def _user_from_token(self, token: str) -> User:
        try:
            payload = self.tokens.verify(token)
        except jwt.PyJWTError as e:
            logger.info("Token rejected", extra={"reason": type(e).__name__})
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from e

        email = payload.get("email")
        if not isinstance(email, str) or not email:
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)

        # Claims may be stale (role, name); always reload the row.
        user = self.users.find_one_by_email(email)
        if user is None:
            raise NotFoundError()
        return user

    def _issue(self, user: User) -> AuthResult:
        token = self.tokens.issue(
            {"id": user.id, "email": user.email, "role": user.role.value}
        )
        return AuthResult(token=token, user=to_public(user))
