"""
Reusable seed data functions for database initialization.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Employers
from ..logging import get_logger
from ..records import repository as records_repo

logger = get_logger(__name__)


async def ensure_employer(db: AsyncSession, *, name: str) -> UUID:
    """
    Ensure an employer with the given name exists.

    Creates the employer if no employer has that name yet, otherwise returns
    the existing employer's ID.

    Args:
        db: Database session
        name: Employer name

    Returns:
        UUID of the employer (existing or newly created)
    """
    stmt = select(Employers).where(Employers.name == name).limit(1)
    result = await db.execute(stmt)
    existing = result.scalar_one_or_none()

    if existing:
        logger.debug("Employer already exists", employer_id=str(existing.id), name=name)
        return existing.id

    employer = await records_repo.create_employer(db, name=name)
    logger.info("Created new employer", employer_id=str(employer.id), name=name)
    return employer.id
