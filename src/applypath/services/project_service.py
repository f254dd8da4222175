"""Project and activity services - every call is checked against the policy."""

from collections.abc import Mapping
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.config import Settings, get_settings
from src.applypath.core.exceptions import NotFound, ValidationError
from src.applypath.core.logging import get_logger
from src.applypath.core.policy import (
    Actor,
    Operation,
    ResourceKind,
    authorize,
    can_perform,
    project_visible,
)
from src.applypath.core.validators import validate_payload
from src.applypath.models import Activity, Project
from src.applypath.repositories import ActivityRepository, ProfileRepository, ProjectRepository
from src.applypath.schemas.pagination import Page
from src.applypath.schemas.project import (
    ActivityCreate,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.applypath.services.base import unit_of_work

logger = get_logger(__name__)


class ProjectService:
    """Project CRUD.

    Write calls check the role gate before touching the row, so a caller
    without write access gets PermissionDenied whether or not the project
    exists. Reads treat invisible projects as missing.
    """

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.project_repo = ProjectRepository(session)
        self.activity_repo = ActivityRepository(session)
        self.profile_repo = ProfileRepository(session)

    def _check_dates(self, start_date: date, deadline: date) -> None:
        if self.settings.enforce_deadline_order and deadline < start_date:
            raise ValidationError("Deadline cannot be before start date")

    async def _check_assignee(self, assigned_to: UUID | None) -> None:
        if assigned_to is not None and not await self.profile_repo.exists(assigned_to):
            raise NotFound(f"Profile {assigned_to} not found")

    async def _lock(self, project_id: int) -> Project:
        # Checks run before the unit of work; the row lock is taken inside it
        project = await self.project_repo.get_by_id(project_id, for_update=True)
        if project is None:
            raise NotFound(f"Project {project_id} not found")
        return project

    async def create(self, actor: Actor, data: ProjectCreate | Mapping[str, Any]) -> Project:
        """Create a project. Managers only."""
        authorize(actor, Operation.CREATE, ResourceKind.PROJECT)
        payload = validate_payload(ProjectCreate, data)
        self._check_dates(payload.start_date, payload.deadline)
        await self._check_assignee(payload.assigned_to)

        project = Project(
            **payload.model_dump(exclude={"status"}),
            status=payload.status.value,
        )
        authorize(actor, Operation.CREATE, ResourceKind.PROJECT, project)

        async with unit_of_work(self.session, "Project conflicts with existing data"):
            await self.project_repo.save(project)

        logger.info(
            "Project created",
            project_id=project.id,
            actor_id=str(actor.id),
            assigned_to=str(project.assigned_to) if project.assigned_to else None,
        )
        return project

    async def get(self, actor: Actor, project_id: int) -> Project:
        """Get a project the actor may read.

        Raises:
            NotFound: Missing or not visible to the actor.
        """
        project = await self.project_repo.get_by_id(project_id)
        if project is None or not can_perform(
            actor, Operation.READ, ResourceKind.PROJECT, project
        ):
            raise NotFound(f"Project {project_id} not found")
        return project

    async def list_projects(
        self,
        actor: Actor,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> Page[ProjectRead]:
        """List projects visible to the actor, newest first."""
        limit = min(limit or self.settings.default_page_size, self.settings.max_page_size)
        visibility = project_visible(actor.id, actor.is_manager, Project.assigned_to)
        projects, next_cursor, has_more = await self.project_repo.list_visible(
            visibility, cursor=cursor, limit=limit
        )
        return Page[ProjectRead](
            items=[ProjectRead.model_validate(p) for p in projects],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def update(
        self,
        actor: Actor,
        project_id: int,
        data: ProjectUpdate | Mapping[str, Any],
    ) -> Project:
        """Apply a partial update. `updated_at` is always set by the write path."""
        authorize(actor, Operation.UPDATE, ResourceKind.PROJECT)
        payload = validate_payload(ProjectUpdate, data)

        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound(f"Project {project_id} not found")
        authorize(actor, Operation.UPDATE, ResourceKind.PROJECT, project)

        changes = payload.model_dump(exclude_unset=True)
        if "status" in changes:
            changes["status"] = changes["status"].value
        if "assigned_to" in changes:
            await self._check_assignee(changes["assigned_to"])
        self._check_dates(
            changes.get("start_date", project.start_date),
            changes.get("deadline", project.deadline),
        )

        async with unit_of_work(self.session, "Project update conflicts with existing data"):
            project = await self._lock(project_id)
            # Dates may have moved between the check above and the lock
            self._check_dates(
                changes.get("start_date", project.start_date),
                changes.get("deadline", project.deadline),
            )
            for field, value in changes.items():
                setattr(project, field, value)
            await self.project_repo.save(project)

        logger.info(
            "Project updated",
            project_id=project.id,
            actor_id=str(actor.id),
            fields=sorted(changes),
        )
        return project

    async def delete(self, actor: Actor, project_id: int) -> None:
        """Delete a project together with its activity log."""
        authorize(actor, Operation.DELETE, ResourceKind.PROJECT)

        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound(f"Project {project_id} not found")
        authorize(actor, Operation.DELETE, ResourceKind.PROJECT, project)

        async with unit_of_work(self.session, "Project is still referenced"):
            project = await self._lock(project_id)
            removed = await self.activity_repo.delete_for_project(project_id)
            await self.project_repo.delete(project)

        logger.info(
            "Project deleted",
            project_id=project_id,
            actor_id=str(actor.id),
            activities_removed=removed,
        )


class ActivityService:
    """Append-only activity log attached to projects."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.activity_repo = ActivityRepository(session)
        self.project_repo = ProjectRepository(session)

    async def _readable_project(self, actor: Actor, project_id: int) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None or not can_perform(
            actor, Operation.READ, ResourceKind.PROJECT, project
        ):
            raise NotFound(f"Project {project_id} not found")
        return project

    async def create(
        self,
        actor: Actor,
        project_id: int,
        data: ActivityCreate | Mapping[str, Any],
    ) -> Activity:
        """Append an activity to a project. Managers only."""
        authorize(actor, Operation.CREATE, ResourceKind.ACTIVITY)
        payload = validate_payload(ActivityCreate, data)

        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFound(f"Project {project_id} not found")

        activity = Activity(project_id=project_id, description=payload.description)
        authorize(actor, Operation.CREATE, ResourceKind.ACTIVITY, activity)

        async with unit_of_work(self.session, "Activity conflicts with existing data"):
            self.activity_repo.add(activity)
            await self.session.flush()

        logger.info(
            "Activity created",
            activity_id=activity.id,
            project_id=project_id,
            actor_id=str(actor.id),
        )
        return activity

    async def get(self, actor: Actor, activity_id: int) -> Activity:
        """Get an activity whose parent project the actor may read."""
        activity = await self.activity_repo.get_by_id(activity_id)
        if activity is None:
            raise NotFound(f"Activity {activity_id} not found")
        parent = await self.project_repo.get_by_id(activity.project_id)
        if not can_perform(actor, Operation.READ, ResourceKind.ACTIVITY, activity, parent=parent):
            raise NotFound(f"Activity {activity_id} not found")
        return activity

    async def list_for_project(self, actor: Actor, project_id: int) -> list[Activity]:
        project = await self._readable_project(actor, project_id)
        return await self.activity_repo.list_for_project(project.id)

    async def update(
        self,
        actor: Actor,
        activity_id: int,
        data: ActivityCreate | Mapping[str, Any],
    ) -> None:
        """Always refused: the activity log is append-only.

        Raises:
            PermissionDenied: For every actor.
        """
        authorize(actor, Operation.UPDATE, ResourceKind.ACTIVITY)

    async def delete(self, actor: Actor, activity_id: int) -> None:
        """Always refused: activities go away only with their project.

        Raises:
            PermissionDenied: For every actor.
        """
        authorize(actor, Operation.DELETE, ResourceKind.ACTIVITY)
