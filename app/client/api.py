"""HTTP client for the users API and the list-page flows built on it."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.client.store import (
    RequestFailed,
    UserDeleted,
    UsersLoaded,
    UsersLoading,
    UsersStore,
    UserUpdated,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 10.0


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UsersApiClient:
    """
    Thin wrapper over httpx.Client for the users and auth endpoints.

    login() and refresh() store the returned token and send it as a bearer
    token on later calls.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        client: httpx.Client | None = None,
    ) -> None:
        self.token = token
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> UsersApiClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def login(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data

    def refresh(self) -> dict[str, Any]:
        data = self._request("POST", "/auth/refresh")
        self.token = data["token"]
        return data

    def list_users(self) -> list[dict[str, Any]]:
        return self._request("GET", "/users")

    def get_user(self, user_id: int) -> dict[str, Any]:
        return self._request("GET", f"/users/{user_id}")

    def update_user(self, user_id: int, **fields: Any) -> dict[str, Any]:
        return self._request("PATCH", f"/users/{user_id}", json=fields)

    def delete_user(self, user_id: int) -> None:
        self._request("DELETE", f"/users/{user_id}")

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        response = self._client.request(method, path, json=json, headers=headers)
        if response.is_error:
            raise ApiError(_error_detail(response), status_code=response.status_code)
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return f"HTTP {response.status_code}"


def load_users(client: UsersApiClient, store: UsersStore) -> None:
    """Fetch the user list into the store; failures land in state.error."""
    store.dispatch(UsersLoading())
    try:
        users = client.list_users()
    except (ApiError, httpx.HTTPError) as e:
        logger.warning("Loading users failed: %s", e)
        store.dispatch(RequestFailed(str(e)))
        return
    store.dispatch(UsersLoaded(tuple(users)))


def update_user(client: UsersApiClient, store: UsersStore, user_id: int, **fields: Any) -> None:
    """Send the update and merge the returned user into the store."""
    store.dispatch(UsersLoading())
    try:
        user = client.update_user(user_id, **fields)
    except (ApiError, httpx.HTTPError) as e:
        store.dispatch(RequestFailed(str(e)))
        return
    store.dispatch(UserUpdated(user))


def delete_user(client: UsersApiClient, store: UsersStore, user_id: int) -> None:
    """Delete on the server, then drop the user from the store."""
    store.dispatch(UsersLoading())
    try:
        client.delete_user(user_id)
    except (ApiError, httpx.HTTPError) as e:
        store.dispatch(RequestFailed(str(e)))
        return
    store.dispatch(UserDeleted(user_id))
