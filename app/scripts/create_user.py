"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.exceptions import DuplicateEmailError
from app.core.logging_config import configure_logging
from app.core.security import get_password_hasher
from app.models.user import UserRole
from app.schemas.users import UserCreate
from app.services.users import UsersService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user from the command line.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Unique email")
    parser.add_argument("password", help="Plain password (hashed before storage)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        body = UserCreate(
            name=args.name,
            email=args.email,
            password=args.password,
            role=UserRole(args.role),
        )
    except ValidationError as e:
        for err in e.errors():
            print(f"Invalid {err['loc'][0]}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        users = UsersService(db, get_password_hasher(settings))
        user = users.create(body.name, body.email, body.password, body.role)
    except DuplicateEmailError as e:
        print(f"{e.message}: {body.email}", file=sys.stderr)
        return 1
    finally:
        db.close()

    logger.info(
        "User created from CLI",
        extra={"user_id": user.id, "email": user.email, "role": user.role.value},
    )
    print(f"Created user {user.id} <{user.email}> with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
