"""Client-side data layer: HTTP client for the users API and a reducer-based list store."""

from app.client.api import ApiError, UsersApiClient, delete_user, load_users, update_user
from app.client.store import UsersState, UsersStore, reduce

__all__ = [
    "ApiError",
    "UsersApiClient",
    "UsersState",
    "UsersStore",
    "delete_user",
    "load_users",
    "reduce",
    "update_user",
]
