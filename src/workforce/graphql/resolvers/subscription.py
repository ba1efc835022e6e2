"""Subscription streams fed by the application's event topics."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...events import EventKind
from ...logging import get_logger
from ..context import get_topics

if TYPE_CHECKING:
    from ..types.employee import Employee
    from ..types.employer import Employer

logger = get_logger(__name__)


async def stream_new_employees(
    info: strawberry.Info, employer: UUID
) -> AsyncGenerator[Employee, None]:
    """Yield employees as they are created under ``employer``.

    Updates, deletes and creations under other employers are skipped.
    """
    from ..types.employee import Employee as EmployeeType

    topics = get_topics(info)
    logger.info("Subscription opened: new employees", employer_id=str(employer))

    async with aclosing(topics.employee.listen()) as envelopes:
        async for envelope in envelopes:
            if envelope.event is not EventKind.CREATE:
                continue
            if envelope.entity.employer_id != employer:
                continue
            yield EmployeeType.from_record(envelope.entity)


async def stream_employee_changes(info: strawberry.Info) -> AsyncGenerator[Employee, None]:
    """Yield every employee that is created, updated or deleted."""
    from ..types.employee import Employee as EmployeeType

    topics = get_topics(info)
    async with aclosing(topics.employee.subscribe()) as employees:
        async for record in employees:
            yield EmployeeType.from_record(record)


async def stream_employer_changes(info: strawberry.Info) -> AsyncGenerator[Employer, None]:
    """Yield every employer that is created, updated or deleted."""
    from ..types.employer import Employer as EmployerType

    topics = get_topics(info)
    async with aclosing(topics.employer.subscribe()) as employers:
        async for record in employers:
            yield EmployerType.from_record(record)
