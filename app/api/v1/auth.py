"""Login, token refresh, and auth dependencies (get_current_user, require_policies)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.deps import get_auth_service
from app.core.exceptions import UnauthorizedError
from app.schemas.auth import AuthResponse, CurrentUser, LoginRequest
from app.services.auth import AuthResult, AuthService
from app.services.policies import USER, PolicyTarget, check_policies, define_ability

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None:
        raise UnauthorizedError("Não autenticado")
    return credentials.credentials


def _path_user_id(request: Request) -> int | None:
    # Dependencies run before path validation; a non-integer id fails here with the usual 422.
    raw_id = request.path_params.get("user_id")
    if raw_id is None:
        return None
    try:
        return int(raw_id)
    except ValueError:
        raise RequestValidationError(
            [
                {
                    "type": "int_parsing",
                    "loc": ("path", "user_id"),
                    "msg": "Input should be a valid integer, unable to parse string as an integer",
                    "input": raw_id,
                }
            ]
        ) from None


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse.model_validate({"token": result.token, "user": result.user})


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT plus the user.
    Include the token in the Authorization header as: Bearer <token>
    """
    return _to_response(auth.login(body.email, body.password))


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Exchange a still-valid bearer token for a fresh one (rolling session)."""
    return _to_response(auth.login_with_jwt(_bearer_token(credentials)))


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the current user. 401 if missing or invalid."""
    return auth.authenticate(_bearer_token(credentials))


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> CurrentUser | None:
    """Dependency: the current user when a Bearer JWT is sent, else None. 401 if the token is invalid."""
    if credentials is None:
        return None
    return auth.authenticate(credentials.credentials)


def require_policies(operation: str) -> Callable[..., CurrentUser]:
    """
    Dependency factory: authenticate, then run the policies registered for operation.

    The target is the User named by the user_id path parameter, or the users
    collection when the route has none. Raises 403 when any policy denies.
    """

    def dependency(
        request: Request,
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        target = PolicyTarget(USER, _path_user_id(request))
        check_policies(operation, define_ability(current_user), target)
        return current_user

    return dependency
