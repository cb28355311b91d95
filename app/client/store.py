"""
Users list state managed by a pure reducer.

UsersStore is the single owner of the canonical state; views read
store.state and changes only happen through dispatch(action).
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Union

UserItem = dict[str, Any]


@dataclass(frozen=True)
class UsersState:
    users: tuple[UserItem, ...] = ()
    is_loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class UsersLoading:
    pass


@dataclass(frozen=True)
class UsersLoaded:
    users: tuple[UserItem, ...]


@dataclass(frozen=True)
class UserUpdated:
    user: UserItem


@dataclass(frozen=True)
class UserDeleted:
    user_id: int


@dataclass(frozen=True)
class RequestFailed:
    message: str


Action = Union[UsersLoading, UsersLoaded, UserUpdated, UserDeleted, RequestFailed]


def reduce(state: UsersState, action: Action) -> UsersState:
    """Return the next state for action. Never mutates state."""
    if isinstance(action, UsersLoading):
        return replace(state, is_loading=True, error=None)
    if isinstance(action, UsersLoaded):
        return UsersState(users=tuple(action.users))
    if isinstance(action, UserUpdated):
        users = tuple(
            {**u, **action.user} if u["id"] == action.user["id"] else u
            for u in state.users
        )
        return replace(state, users=users, is_loading=False)
    if isinstance(action, UserDeleted):
        users = tuple(u for u in state.users if u["id"] != action.user_id)
        return replace(state, users=users, is_loading=False)
    if isinstance(action, RequestFailed):
        return replace(state, is_loading=False, error=action.message)
    raise TypeError(f"Unknown action: {action!r}")


Listener = Callable[[UsersState], None]


class UsersStore:
    """Holds the current UsersState and notifies listeners after each dispatch."""

    def __init__(self, initial: UsersState | None = None) -> None:
        self._state = initial or UsersState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> UsersState:
        return self._state

    def dispatch(self, action: Action) -> UsersState:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
