"""ORM model for application users."""

import enum

from sqlalchemy import Column, Enum, Integer, String

from app.models.base import Base


class UserRole(str, enum.Enum):
    """Role assigned to every user; drives the ability set."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    password holds the bcrypt hash (salt embedded), never the plain text.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            length=32,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=UserRole.USER,
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
