"""User CRUD endpoints. Every route except signup is gated by a named policy."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_users_service
from app.api.v1.auth import get_optional_user, require_policies
from app.core.exceptions import ForbiddenError
from app.models.user import UserRole
from app.schemas.auth import CurrentUser
from app.schemas.users import (
    PasswordUpdate,
    UserCreate,
    UserCreated,
    UserPublic,
    UserUpdate,
)
from app.services.policies import USER, PolicyTarget, check_policies, define_ability
from app.services.users import UsersService

router = APIRouter()


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    principal: Annotated[CurrentUser | None, Depends(get_optional_user)],
    users: Annotated[UsersService, Depends(get_users_service)],
) -> UserCreated:
    """
    Register a user. 400 when the email is already taken.

    Signup is public for the user role; any other role needs an admin
    bearer token (403 otherwise).
    """
    if body.role not in (None, UserRole.USER):
        if principal is None:
            raise ForbiddenError()
        check_policies("users:assign_role", define_ability(principal), PolicyTarget(USER))
    user = users.create(body.name, body.email, body.password, body.role)
    return UserCreated.model_validate(user)


@router.get("", response_model=list[UserPublic])
def list_users(
    _user: Annotated[CurrentUser, Depends(require_policies("users:list"))],
    users: Annotated[UsersService, Depends(get_users_service)],
) -> list[UserPublic]:
    return [UserPublic.model_validate(u) for u in users.find_all()]


@router.get("/{user_id}", response_model=UserPublic)
def get_user(
    user_id: int,
    _user: Annotated[CurrentUser, Depends(require_policies("users:read"))],
    users: Annotated[UsersService, Depends(get_users_service)],
) -> UserPublic:
    return UserPublic.model_validate(users.find_one(user_id))


@router.patch("/{user_id}", response_model=UserPublic)
def update_user(
    user_id: int,
    body: UserUpdate,
    current_user: Annotated[CurrentUser, Depends(require_policies("users:update"))],
    users: Annotated[UsersService, Depends(get_users_service)],
) -> UserPublic:
    """
    Apply the sent fields. 400 on an empty body or a taken email, 404 on unknown id.

    Users may change their own name, email and password; a role change is
    admin-only (403).
    """
    fields = body.model_dump(exclude_unset=True)
    if fields.get("role") is not None:
        check_policies("users:assign_role", define_ability(current_user), PolicyTarget(USER, user_id))
    updated = users.update(user_id, fields)
    return UserPublic.model_validate(updated)


@router.patch("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def update_password(
    user_id: int,
    body: PasswordUpdate,
    _user: Annotated[CurrentUser, Depends(require_policies("users:update_password"))],
    users: Annotated[UsersService, Depends(get_users_service)],
) -> Response:
    """Change the password; requires the current one. 400 when it does not match."""
    users.update_password(user_id, body.new_password, body.current_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _user: Annotated[CurrentUser, Depends(require_policies("users:delete"))],
    users: Annotated[UsersService, Depends(get_users_service)],
) -> Response:
    users.remove(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
