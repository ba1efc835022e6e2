from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from strawberry import UNSET

from ...database.connection import get_async_session
from ...events import EventKind
from ...logging import get_logger
from ...records import repository as records_repo
from ...records.models import EmployeeRecord
from ..context import get_topics

if TYPE_CHECKING:
    from ..types.employee import Employee

logger = get_logger(__name__)


def _to_graphql(record: EmployeeRecord) -> Employee:
    from ..types.employee import Employee as EmployeeType

    return EmployeeType.from_record(record)


# Query resolvers
async def resolve_employee_by_id(info: strawberry.Info, id: UUID) -> Employee | None:
    """Resolve an employee by its ID."""
    _ = info
    async with get_async_session() as session:
        employee = await records_repo.get_employee(session, id)
        if employee is None:
            logger.info("Employee not found", employee_id=str(id))
            return None
        record = EmployeeRecord.model_validate(employee)

    return _to_graphql(record)


async def resolve_employees(
    info: strawberry.Info, employer_id: UUID | None, limit: int, offset: int
) -> list[Employee]:
    """Resolve employees, optionally restricted to one employer."""
    _ = info
    async with get_async_session() as session:
        employees = await records_repo.list_employees(
            session, employer_id=employer_id, limit=limit, offset=offset
        )
        records = [EmployeeRecord.model_validate(employee) for employee in employees]

    return [_to_graphql(record) for record in records]


# Mutation resolvers
#
# Each mutation performs one write. The session is committed when its block
# exits, so the change event is only published for data that is persisted.
async def create_employee(
    info: strawberry.Info,
    name: str,
    email: str,
    employer: UUID,
    photo_url: str | None = None,
) -> Employee:
    """Create an employee under an existing employer and publish a create event."""
    topics = get_topics(info)

    async with get_async_session() as session:
        employee = await records_repo.create_employee(
            session,
            name=name,
            email=email,
            employer_id=employer,
            photo_url=photo_url,
        )
        record = EmployeeRecord.model_validate(employee)

    logger.info(
        "Employee created",
        employee_id=str(record.id),
        employer_id=str(record.employer_id),
    )

    await topics.employee.publish(record, EventKind.CREATE)
    return _to_graphql(record)


async def update_employee(
    info: strawberry.Info,
    id: UUID,
    name: str | None = UNSET,
    email: str | None = UNSET,
    photo_url: str | None = UNSET,
    employer: UUID | None = UNSET,
) -> Employee | None:
    """Update an employee's fields and publish an update event.

    Arguments left UNSET keep their stored value; an explicit None is
    written as given. Returns None, and publishes nothing, when the employee
    does not exist.
    """
    changes = {
        column: value
        for column, value in (
            ("name", name),
            ("email", email),
            ("photo_url", photo_url),
            ("employer_id", employer),
        )
        if value is not UNSET
    }
    topics = get_topics(info)

    async with get_async_session() as session:
        employee = await records_repo.update_employee(session, id, **changes)
        if employee is None:
            logger.info("Employee not found for update", employee_id=str(id))
            return None
        record = EmployeeRecord.model_validate(employee)

    logger.info("Employee updated", employee_id=str(record.id), columns=sorted(changes))

    await topics.employee.publish(record, EventKind.UPDATE)
    return _to_graphql(record)


async def delete_employee(info: strawberry.Info, id: UUID) -> Employee | None:
    """Delete an employee and publish a delete event carrying its last state.

    Returns None, and publishes nothing, when the employee does not exist.
    """
    topics = get_topics(info)

    async with get_async_session() as session:
        employee = await records_repo.delete_employee(session, id)
        if employee is None:
            logger.info("Employee not found for delete", employee_id=str(id))
            return None
        record = EmployeeRecord.model_validate(employee)

    logger.info("Employee deleted", employee_id=str(record.id))

    await topics.employee.publish(record, EventKind.DELETE)
    return _to_graphql(record)
