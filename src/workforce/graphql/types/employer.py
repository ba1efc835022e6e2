"""
Employer GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

from ...records.models import EmployerRecord

if TYPE_CHECKING:
    from .employee import Employee


@strawberry.type(description="Employer is the owner of company")
class Employer:
    """Employer type for GraphQL API."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    async def employees(
        self, info: strawberry.Info
    ) -> list[Annotated["Employee", strawberry.lazy(".employee")]]:
        """Get the employees of this employer."""
        from ..resolvers.employer import resolve_employer_employees

        return await resolve_employer_employees(self, info)

    @strawberry.field(name="num_employees", description="Number of employees under a employer")
    async def num_employees(self, info: strawberry.Info) -> int:
        from ..resolvers.employer import resolve_num_employees

        return await resolve_num_employees(self, info)

    @classmethod
    def from_record(cls, record: EmployerRecord) -> "Employer":
        return cls(
            id=record.id,
            name=record.name,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
