"""
Root GraphQL mutation definitions
"""

from typing import Annotated
from uuid import UUID

import strawberry

from ..types.employee import Employee
from ..types.employer import Employer

PhotoUrlArgument = Annotated[str | None, strawberry.argument(name="photo_url")]


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Employee mutations
    @strawberry.mutation(name="createEmployee")
    async def create_employee(
        self,
        info: strawberry.Info,
        name: str,
        email: str,
        employer: UUID,
        photo_url: PhotoUrlArgument = None,
    ) -> Employee:
        """Create a new employee under an employer."""
        from ..resolvers.employee import create_employee

        return await create_employee(info, name, email, employer, photo_url)

    @strawberry.mutation(name="updateEmployee")
    async def update_employee(
        self,
        info: strawberry.Info,
        id: UUID,
        name: str | None = strawberry.UNSET,
        email: str | None = strawberry.UNSET,
        photo_url: PhotoUrlArgument = strawberry.UNSET,
        employer: UUID | None = strawberry.UNSET,
    ) -> Employee | None:
        """Update the given fields of an employee. Returns null if it does not exist."""
        from ..resolvers.employee import update_employee

        return await update_employee(info, id, name, email, photo_url, employer)

    @strawberry.mutation(name="deleteEmployee")
    async def delete_employee(self, info: strawberry.Info, id: UUID) -> Employee | None:
        """Delete an employee. Returns null if it does not exist."""
        from ..resolvers.employee import delete_employee

        return await delete_employee(info, id)

    # Employer mutations
    @strawberry.mutation(name="createEmployer")
    async def create_employer(self, info: strawberry.Info, name: str) -> Employer:
        """Create a new employer."""
        from ..resolvers.employer import create_employer

        return await create_employer(info, name)

    @strawberry.mutation(name="updateEmployer")
    async def update_employer(
        self, info: strawberry.Info, id: UUID, name: str | None = strawberry.UNSET
    ) -> Employer | None:
        """Update an employer. Returns null if it does not exist."""
        from ..resolvers.employer import update_employer

        return await update_employer(info, id, name)

    @strawberry.mutation(name="deleteEmployer")
    async def delete_employer(self, info: strawberry.Info, id: UUID) -> Employer | None:
        """Delete an employer that has no employees. Returns null if it does not exist."""
        from ..resolvers.employer import delete_employer

        return await delete_employer(info, id)
