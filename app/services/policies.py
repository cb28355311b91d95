"""
Role-based abilities and per-operation policy checks.

An Ability is derived once per request from the principal's role. Each
operation id maps to an ordered list of policy handlers; all of them must
allow the request before the handler runs.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from app.core.exceptions import ForbiddenError
from app.models.user import UserRole
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Actions a rule can grant. MANAGE implies every other action."""

    MANAGE = "manage"
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


# Subject types
USER = "User"
ALL = "all"


@dataclass(frozen=True)
class PolicyTarget:
    """Resource a request acts on; id is None for collection-level actions."""

    subject_type: str
    id: int | None = None


@dataclass(frozen=True)
class Rule:
    action: Action
    subject_type: str
    owner_only: bool = False

    def matches(self, action: Action, subject_type: str) -> bool:
        action_ok = self.action is Action.MANAGE or self.action is action
        subject_ok = self.subject_type == ALL or self.subject_type == subject_type
        return action_ok and subject_ok


@dataclass
class Ability:
    """The (action, subject type) pairs a principal may perform."""

    principal_id: int
    rules: list[Rule] = field(default_factory=list)

    def can(self, action: Action, subject_type: str, target: PolicyTarget | None = None) -> bool:
        for rule in self.rules:
            if not rule.matches(action, subject_type):
                continue
            if not rule.owner_only:
                return True
            # Owner-only rules need a concrete target to compare against.
            if target is not None and target.id == self.principal_id:
                return True
        return False


def define_ability(principal: CurrentUser) -> Ability:
    """Build the ability set for a principal from its role."""
    if principal.role == UserRole.ADMIN:
        return Ability(principal.id, [Rule(Action.MANAGE, ALL)])
    return Ability(
        principal.id,
        [
            Rule(Action.READ, USER),
            Rule(Action.UPDATE, USER, owner_only=True),
            Rule(Action.DELETE, USER, owner_only=True),
        ],
    )


PolicyHandler = Callable[[Ability, PolicyTarget], bool]


def can(action: Action) -> PolicyHandler:
    """Policy handler allowing the request when the ability grants action on the target."""

    def handler(ability: Ability, target: PolicyTarget) -> bool:
        return ability.can(action, target.subject_type, target)

    handler.__name__ = f"can_{action.value}"
    return handler


POLICIES: dict[str, list[PolicyHandler]] = {
    "users:list": [can(Action.READ)],
    "users:read": [can(Action.READ)],
    "users:update": [can(Action.UPDATE)],
    "users:update_password": [can(Action.UPDATE)],
    "users:delete": [can(Action.DELETE)],
    # Setting a role on signup or update; only MANAGE grants it.
    "users:assign_role": [can(Action.MANAGE)],
}


def check_policies(operation: str, ability: Ability, target: PolicyTarget) -> None:
    """
    Run every handler registered for operation, in order.

    Raises ForbiddenError on the first handler that denies. An operation with
    no registry entry raises KeyError.
    """
    for handler in POLICIES[operation]:
        if not handler(ability, target):
            logger.info(
                "Policy denied",
                extra={
                    "operation": operation,
                    "policy": handler.__name__,
                    "principal_id": ability.principal_id,
                    "target_id": target.id,
                },
            )
            raise ForbiddenError()
