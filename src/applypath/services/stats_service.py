"""Visibility-scoped project statistics."""

from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.policy import Actor, project_visible
from src.applypath.models import Project, ProjectStatus
from src.applypath.schemas.stats import ProjectStats


class StatsService:
    """Status counts over the projects a reader can see."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_project_stats(self, actor_id: UUID, is_manager: bool) -> ProjectStats:
        """Count in-scope projects in total and per status.

        The scope is the same visibility predicate used for project reads.
        All five counts come from one statement, so they share a snapshot.
        """
        query = select(
            func.count(Project.id).label("total"),
            *(
                func.count(case((Project.status == status.value, 1))).label(status.value)
                for status in ProjectStatus
            ),
        )
        visibility = project_visible(actor_id, is_manager, Project.assigned_to)
        if visibility is not True:
            query = query.where(visibility)

        row = (await self.session.execute(query)).one()
        return ProjectStats(**row._mapping)

    async def stats_for(self, actor: Actor) -> ProjectStats:
        return await self.get_project_stats(actor.id, actor.is_manager)
