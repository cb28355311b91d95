"""Password hashing and JWT issuance/verification."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings, get_settings

# bcrypt ignores input past 72 bytes; newer releases raise instead of truncating.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """One-way bcrypt hashing with a fresh salt per hash."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenService:
    """Issues and verifies signed, time-limited JWTs."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: dict[str, Any], expires_delta: timedelta | None = None) -> str:
        """
        Sign claims with iat and exp added.

        expires_delta overrides the configured window; a negative value yields
        a token that is already expired.
        """
        now = datetime.now(UTC)
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)
        payload: dict[str, Any] = {
            **claims,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a JWT; return its payload.
        Raises jwt.PyJWTError on invalid, malformed or expired token.
        """
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self.algorithm],
            options={"require": ["exp", "iat"]},
        )


def get_password_hasher(settings: Settings | None = None) -> PasswordHasher:
    """Build a PasswordHasher from settings."""
    settings = settings or get_settings()
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def get_token_service(settings: Settings | None = None) -> TokenService:
    """Build a TokenService from settings."""
    settings = settings or get_settings()
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )
