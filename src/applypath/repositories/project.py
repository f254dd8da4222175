"""Repositories for Project and Activity entities."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.applypath.core.hooks import touches_updated_at
from src.applypath.models import Activity, Project
from src.applypath.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity.

    Every write goes through `save()`, which stamps `updated_at`.
    """

    model = Project

    @touches_updated_at
    async def save(self, project: Project) -> Project:
        """Persist a new or modified project and flush it."""
        self.session.add(project)
        await self.session.flush()
        return project

    async def list_visible(
        self,
        visibility: Any,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List projects matching a visibility clause, newest first.

        Args:
            visibility: SQL clause from `project_visible`, or True for all rows
            cursor: Optional cursor for pagination
            limit: Maximum number of results

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        query = select(Project)
        if visibility is not True:
            query = query.where(visibility)
        return await self.paginate(query, cursor, limit, Project.id)

    async def unassign_profile(self, profile_id: UUID) -> int:
        """Null out `assigned_to` on every project held by a profile.

        Each project goes through `save()` so its `updated_at` moves too.

        Returns:
            Number of projects unassigned.
        """
        result = await self.session.execute(
            select(Project).where(Project.assigned_to == profile_id).with_for_update()
        )
        projects = list(result.scalars().all())
        for project in projects:
            project.assigned_to = None
            await self.save(project)
        return len(projects)


class ActivityRepository(BaseRepository[Activity]):
    """Repository for the append-only activity log."""

    model = Activity

    async def list_for_project(self, project_id: int) -> list[Activity]:
        """List a project's activities, oldest first."""
        result = await self.session.execute(
            select(Activity)
            .where(Activity.project_id == project_id)
            .order_by(Activity.created_at, Activity.id)
        )
        return list(result.scalars().all())

    async def delete_for_project(self, project_id: int) -> int:
        """Delete every activity of a project.

        Returns:
            Number of activities removed.
        """
        result = await self.session.execute(
            delete(Activity)
            .where(Activity.project_id == project_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
