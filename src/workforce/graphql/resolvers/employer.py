from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from strawberry import UNSET

from ...database.connection import get_async_session
from ...events import EventKind
from ...logging import get_logger
from ...records import repository as records_repo
from ...records.models import EmployeeRecord, EmployerRecord
from ..context import get_loaders, get_topics

if TYPE_CHECKING:
    from ..types.employee import Employee
    from ..types.employer import Employer

logger = get_logger(__name__)


def _to_graphql(record: EmployerRecord) -> Employer:
    from ..types.employer import Employer as EmployerType

    return EmployerType.from_record(record)


# Query resolvers
async def resolve_employer_by_id(info: strawberry.Info, id: UUID) -> Employer | None:
    """Resolve an employer by its ID."""
    _ = info
    async with get_async_session() as session:
        employer = await records_repo.get_employer(session, id)
        if employer is None:
            logger.info("Employer not found", employer_id=str(id))
            return None
        record = EmployerRecord.model_validate(employer)

    return _to_graphql(record)


async def resolve_employers(info: strawberry.Info, limit: int, offset: int) -> list[Employer]:
    _ = info
    async with get_async_session() as session:
        employers = await records_repo.list_employers(session, limit=limit, offset=offset)
        records = [EmployerRecord.model_validate(employer) for employer in employers]

    return [_to_graphql(record) for record in records]


# Field resolvers
async def resolve_employee_employer(employee: Employee, info: strawberry.Info) -> Employer | None:
    """Resolve the employer of an employee through the request's data loader."""
    record = await get_loaders(info).employer_loader.load(employee.employer_id)
    if record is None:
        return None
    return _to_graphql(record)


async def resolve_employer_employees(employer: Employer, info: strawberry.Info) -> list[Employee]:
    from ..types.employee import Employee as EmployeeType

    _ = info
    async with get_async_session() as session:
        employees = await records_repo.list_employees(session, employer_id=employer.id)
        records = [EmployeeRecord.model_validate(employee) for employee in employees]

    return [EmployeeType.from_record(record) for record in records]


async def resolve_num_employees(employer: Employer, info: strawberry.Info) -> int:
    """Count the employees referencing this employer. Recomputed on every read."""
    _ = info
    async with get_async_session() as session:
        return await records_repo.count_employees(session, employer.id)


# Mutation resolvers
async def create_employer(info: strawberry.Info, name: str) -> Employer:
    topics = get_topics(info)

    async with get_async_session() as session:
        employer = await records_repo.create_employer(session, name=name)
        record = EmployerRecord.model_validate(employer)

    logger.info("Employer created", employer_id=str(record.id), name=record.name)

    await topics.employer.publish(record, EventKind.CREATE)
    return _to_graphql(record)


async def update_employer(
    info: strawberry.Info, id: UUID, name: str | None = UNSET
) -> Employer | None:
    topics = get_topics(info)
    changes = {} if name is UNSET else {"name": name}

    async with get_async_session() as session:
        employer = await records_repo.update_employer(session, id, **changes)
        if employer is None:
            logger.info("Employer not found for update", employer_id=str(id))
            return None
        record = EmployerRecord.model_validate(employer)

    logger.info("Employer updated", employer_id=str(record.id))

    await topics.employer.publish(record, EventKind.UPDATE)
    return _to_graphql(record)


async def delete_employer(info: strawberry.Info, id: UUID) -> Employer | None:
    """
    Delete an employer.

    The database rejects the delete while employees still reference the
    employer; that error reaches the caller unchanged.
    """
    topics = get_topics(info)

    async with get_async_session() as session:
        employer = await records_repo.delete_employer(session, id)
        if employer is None:
            logger.info("Employer not found for delete", employer_id=str(id))
            return None
        record = EmployerRecord.model_validate(employer)

    logger.info("Employer deleted", employer_id=str(record.id))

    await topics.employer.publish(record, EventKind.DELETE)
    return _to_graphql(record)
