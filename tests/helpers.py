"""Test helper functions for common data creation patterns."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.policy import Actor
from src.applypath.models import Identity, Profile, ProfileRole, Project
from tests.factories import IdentityFactory, ProfileFactory


async def create_profile(
    session: AsyncSession,
    role: ProfileRole = ProfileRole.CONSULTANT,
    **profile_kwargs,
) -> tuple[Identity, Profile]:
    """Insert an identity and its profile directly, bypassing provisioning.

    Args:
        session: Database session
        role: Role for the profile (default: CONSULTANT)
        **profile_kwargs: Additional args passed to ProfileFactory

    Returns:
        Tuple of (identity, profile)
    """
    identity = IdentityFactory.build()
    session.add(identity)
    await session.flush()

    profile = ProfileFactory.build(
        id=identity.id,
        email=identity.email,
        role=role.value,
        **profile_kwargs,
    )
    session.add(profile)
    await session.commit()

    return identity, profile


async def create_actor(
    session: AsyncSession,
    role: ProfileRole = ProfileRole.CONSULTANT,
    **profile_kwargs,
) -> Actor:
    """Create a persisted profile and return it as an actor."""
    _, profile = await create_profile(session, role, **profile_kwargs)
    return Actor.from_profile(profile)


async def create_projects(session: AsyncSession, *projects: Project) -> list[Project]:
    """Insert prebuilt projects directly and commit."""
    session.add_all(projects)
    await session.commit()
    return list(projects)


async def count_rows(session: AsyncSession, model: type, *criteria) -> int:
    """Count rows of a table, optionally filtered."""
    query = select(func.count()).select_from(model)
    for criterion in criteria:
        query = query.where(criterion)
    result = await session.execute(query)
    return result.scalar_one()
