"""User management: create, update, password change, lookup and removal over the users table."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DuplicateEmailError,
    EmptyUpdateError,
    InvalidCredentialError,
    NotFoundError,
)
from app.core.security import PasswordHasher
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

# Fields update() applies; anything else in the payload is ignored.
UPDATABLE_FIELDS = ("name", "email", "role", "password")


def to_public(user: User) -> dict[str, Any]:
    """Return the user as a plain dict without the password hash."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }


class UsersService:
    """
    Owns reads and writes of User rows for one request.

    Email uniqueness is checked with a query before insert/update so the
    caller gets DuplicateEmailError; the unique index still backs it, and a
    lost race surfaces as the same error.
    """

    def __init__(self, db: Session, hasher: PasswordHasher) -> None:
        self.db = db
        self.hasher = hasher

    def create(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole | None = None,
    ) -> User:
        """Insert a new user with a hashed password. Returns the row including the hash."""
        if self.find_one_by_email(email) is not None:
            raise DuplicateEmailError()

        user = User(
            name=name,
            email=email,
            password=self.hasher.hash(password),
            role=role or UserRole.USER,
        )
        self.db.add(user)
        self._commit_unique_email()
        self.db.refresh(user)
        logger.info("User created", extra={"user_id": user.id, "role": user.role.value})
        return user

    def update(self, user_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Apply the recognised, non-null fields to the user and return it without the password.

        Raises EmptyUpdateError before any lookup when nothing applicable was sent.
        """
        changes = {
            key: value
            for key, value in fields.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if not changes:
            raise EmptyUpdateError()

        user = self._get(user_id)

        email = changes.get("email")
        if email is not None and email != user.email:
            existing = self.find_one_by_email(email)
            if existing is not None and existing.id != user.id:
                raise DuplicateEmailError()

        if "password" in changes:
            changes["password"] = self.hasher.hash(changes["password"])

        for key, value in changes.items():
            setattr(user, key, value)
        self._commit_unique_email()
        self.db.refresh(user)
        logger.info(
            "User updated",
            extra={"user_id": user.id, "fields": sorted(changes)},
        )
        return to_public(user)

    def update_password(self, user_id: int, new_password: str, current_password: str) -> None:
        """Replace the password hash after proving knowledge of the current password."""
        user = self._get(user_id)
        if not self.hasher.verify(current_password, user.password):
            logger.info("Password change rejected", extra={"user_id": user_id})
            raise InvalidCredentialError()

        user.password = self.hasher.hash(new_password)
        self.db.commit()
        logger.info("Password changed", extra={"user_id": user_id})

    def find_all(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def find_one(self, user_id: int) -> dict[str, Any]:
        return to_public(self._get(user_id))

    def find_one_by_email(self, email: str) -> User | None:
        """Return the user with this exact email, or None. Never raises on a miss."""
        return self.db.query(User).filter(User.email == email).first()

    def remove(self, user_id: int) -> None:
        user = self._get(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("User removed", extra={"user_id": user_id})

    def _get(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError()
        return user

    def _commit_unique_email(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Unique email constraint hit on commit", extra={"error": str(e.orig)})
            raise DuplicateEmailError() from e
