"""
Root GraphQL query definitions
"""

from uuid import UUID

import strawberry

from ..types.employee import Employee
from ..types.employer import Employer


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def employee(self, info: strawberry.Info, id: UUID) -> Employee | None:
        """Get an employee by ID."""
        from ..resolvers.employee import resolve_employee_by_id

        return await resolve_employee_by_id(info, id)

    @strawberry.field
    async def employees(
        self,
        info: strawberry.Info,
        employer: UUID | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Employee]:
        """Get employees, optionally only those of one employer."""
        from ..resolvers.employee import resolve_employees

        return await resolve_employees(info, employer, limit, offset)

    @strawberry.field
    async def employer(self, info: strawberry.Info, id: UUID) -> Employer | None:
        """Get an employer by ID."""
        from ..resolvers.employer import resolve_employer_by_id

        return await resolve_employer_by_id(info, id)

    @strawberry.field
    async def employers(
        self,
        info: strawberry.Info,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Employer]:
        """Get employers."""
        from ..resolvers.employer import resolve_employers

        return await resolve_employers(info, limit, offset)
