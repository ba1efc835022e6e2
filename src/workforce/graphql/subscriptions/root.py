"""
Root GraphQL subscription definitions
"""

from collections.abc import AsyncGenerator
from contextlib import aclosing
from uuid import UUID

import strawberry

from ..types.employee import Employee
from ..types.employer import Employer


@strawberry.type
class Subscription:
    """Root GraphQL subscription type."""

    @strawberry.subscription
    async def employees(
        self, info: strawberry.Info, employer: UUID
    ) -> AsyncGenerator[Employee, None]:
        """Employees created under the given employer, as they are created."""
        from ..resolvers.subscription import stream_new_employees

        async with aclosing(stream_new_employees(info, employer)) as stream:
            async for employee in stream:
                yield employee

    @strawberry.subscription
    async def employee_changed(self, info: strawberry.Info) -> AsyncGenerator[Employee, None]:
        """Every employee create, update and delete."""
        from ..resolvers.subscription import stream_employee_changes

        async with aclosing(stream_employee_changes(info)) as stream:
            async for employee in stream:
                yield employee

    @strawberry.subscription
    async def employer_changed(self, info: strawberry.Info) -> AsyncGenerator[Employer, None]:
        """Every employer create, update and delete."""
        from ..resolvers.subscription import stream_employer_changes

        async with aclosing(stream_employer_changes(info)) as stream:
            async for employer in stream:
                yield employer
