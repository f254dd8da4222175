"""Row-level authorization rules.

Every check takes the actor explicitly. Rules are allow-predicates: an
operation is permitted if any predicate for its (operation, kind) pair
matches, and denied otherwise.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import UUID

from src.applypath.core.exceptions import PermissionDenied
from src.applypath.core.logging import get_logger
from src.applypath.models import Profile, ProfileRole

logger = get_logger(__name__)


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class ResourceKind(str, Enum):
    PROFILE = "profile"
    PROJECT = "project"
    ACTIVITY = "activity"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller resolved to its profile."""

    id: UUID
    role: ProfileRole

    @property
    def is_manager(self) -> bool:
        return self.role == ProfileRole.MANAGER

    @classmethod
    def from_profile(cls, profile: Profile) -> "Actor":
        return cls(id=profile.id, role=profile.role_enum)


def project_visible(actor_id: UUID, is_manager: bool, assigned_to: Any) -> Any:
    """Visibility of a project to a reader.

    `assigned_to` may be a loaded value or the `Project.assigned_to` column.
    For a value the result is a bool; for the column it is a SQL clause, or
    `True` when the reader sees every row. Single-row reads, listings and
    the stats query all go through here.
    """
    if is_manager:
        return True
    return assigned_to == actor_id


Rule = Callable[[Actor, Any, Any], bool]


def _always(actor: Actor, resource: Any, parent: Any) -> bool:
    return True


def _is_self(actor: Actor, resource: Any, parent: Any) -> bool:
    return resource is not None and resource.id == actor.id


def _is_manager(actor: Actor, resource: Any, parent: Any) -> bool:
    return actor.is_manager


def _sees_project(actor: Actor, resource: Any, parent: Any) -> bool:
    assigned_to = getattr(resource, "assigned_to", None)
    return bool(project_visible(actor.id, actor.is_manager, assigned_to))


def _can_read_parent(actor: Actor, resource: Any, parent: Any) -> bool:
    if parent is None:
        return False
    if resource is not None and resource.project_id != parent.id:
        return False
    return can_perform(actor, Operation.READ, ResourceKind.PROJECT, parent)


RULES: dict[tuple[ResourceKind, Operation], tuple[Rule, ...]] = {
    (ResourceKind.PROFILE, Operation.READ): (_always,),
    (ResourceKind.PROFILE, Operation.CREATE): (_is_self,),
    (ResourceKind.PROFILE, Operation.UPDATE): (_is_self,),
    (ResourceKind.PROJECT, Operation.READ): (_sees_project,),
    (ResourceKind.PROJECT, Operation.CREATE): (_is_manager,),
    (ResourceKind.PROJECT, Operation.UPDATE): (_is_manager,),
    (ResourceKind.PROJECT, Operation.DELETE): (_is_manager,),
    (ResourceKind.ACTIVITY, Operation.READ): (_can_read_parent,),
    (ResourceKind.ACTIVITY, Operation.CREATE): (_is_manager,),
    # Activities are append-only: no rule grants update or delete.
}


def can_perform(
    actor: Actor,
    operation: Operation,
    kind: ResourceKind,
    resource: Any = None,
    *,
    parent: Any = None,
) -> bool:
    """Return True if `actor` may apply `operation` to `resource`.

    Args:
        actor: The caller.
        operation: create, read, update or delete.
        kind: Resource kind being accessed.
        resource: The concrete row, or None for row-less checks (bulk create,
                  pre-filtering). Row-less checks only evaluate role gates.
        parent: Parent project, required for activity reads.
    """
    rules = RULES.get((kind, operation), ())
    return any(rule(actor, resource, parent) for rule in rules)


def authorize(
    actor: Actor,
    operation: Operation,
    kind: ResourceKind,
    resource: Any = None,
    *,
    parent: Any = None,
) -> None:
    """Raise PermissionDenied unless `can_perform` allows the operation."""
    if can_perform(actor, operation, kind, resource, parent=parent):
        return
    logger.warning(
        "Permission denied",
        actor_id=str(actor.id),
        actor_role=ProfileRole(actor.role).value,
        operation=operation.value,
        resource_kind=kind.value,
        resource_id=str(getattr(resource, "id", None)),
    )
    raise PermissionDenied(f"Not allowed to {operation.value} {kind.value}")
