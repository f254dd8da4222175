"""Integration tests for visibility-scoped project statistics."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.policy import Actor
from src.applypath.models import ProjectStatus
from src.applypath.schemas.stats import ProjectStats
from src.applypath.services import ProjectService, StatsService
from tests.factories import ProjectFactory
from tests.helpers import create_projects

pytestmark = pytest.mark.integration


def status_sum(stats: ProjectStats) -> int:
    return stats.active + stats.pending + stats.completed + stats.urgent


@pytest.fixture
async def mixed_projects(
    db_session: AsyncSession, consultant_actor: Actor, other_consultant_actor: Actor
):
    """Eight projects across every status and three assignment states."""
    c, d = consultant_actor.id, other_consultant_actor.id
    return await create_projects(
        db_session,
        ProjectFactory.with_status(ProjectStatus.PENDING, assigned_to=c),
        ProjectFactory.with_status(ProjectStatus.ACTIVE, assigned_to=c),
        ProjectFactory.with_status(ProjectStatus.ACTIVE, assigned_to=c),
        ProjectFactory.with_status(ProjectStatus.URGENT, assigned_to=d),
        ProjectFactory.with_status(ProjectStatus.COMPLETED, assigned_to=d),
        ProjectFactory.with_status(ProjectStatus.PENDING),
        ProjectFactory.with_status(ProjectStatus.COMPLETED),
        ProjectFactory.with_status(ProjectStatus.URGENT),
    )


class TestProjectStats:
    async def test_manager_counts_every_project(
        self, db_session: AsyncSession, manager_actor: Actor, mixed_projects
    ):
        stats = await StatsService(db_session).get_project_stats(manager_actor.id, True)

        assert stats == ProjectStats(total=8, active=2, pending=2, completed=2, urgent=2)
        assert status_sum(stats) == stats.total

    async def test_consultant_counts_only_assigned(
        self, db_session: AsyncSession, consultant_actor: Actor, mixed_projects
    ):
        stats = await StatsService(db_session).get_project_stats(consultant_actor.id, False)

        assert stats == ProjectStats(total=3, active=2, pending=1, completed=0, urgent=0)
        assert status_sum(stats) == stats.total

    async def test_other_consultant_scope(
        self, db_session: AsyncSession, other_consultant_actor: Actor, mixed_projects
    ):
        stats = await StatsService(db_session).stats_for(other_consultant_actor)

        assert stats == ProjectStats(total=2, active=0, pending=0, completed=1, urgent=1)

    async def test_empty_scope_is_all_zeros(
        self, db_session: AsyncSession, consultant_actor: Actor
    ):
        stats = await StatsService(db_session).stats_for(consultant_actor)

        assert stats == ProjectStats()

    async def test_stats_agree_with_listing(
        self,
        db_session: AsyncSession,
        manager_actor: Actor,
        consultant_actor: Actor,
        other_consultant_actor: Actor,
        mixed_projects,
    ):
        projects = ProjectService(db_session)
        stats = StatsService(db_session)

        for actor in (manager_actor, consultant_actor, other_consultant_actor):
            page = await projects.list_projects(actor, limit=100)
            assert (await stats.stats_for(actor)).total == len(page.items)
