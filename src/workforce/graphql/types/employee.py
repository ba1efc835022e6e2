"""
Employee GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

from ...records.models import EmployeeRecord

if TYPE_CHECKING:
    from .employer import Employer


@strawberry.type(description="Employee is the property of company")
class Employee:
    """Employee type for GraphQL API."""

    id: UUID
    employer_id: strawberry.Private[UUID]
    name: str
    email: str
    photo_url: str | None = strawberry.field(name="photo_url")
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    async def employer(
        self, info: strawberry.Info
    ) -> Annotated["Employer", strawberry.lazy(".employer")] | None:
        """Get the employer this employee belongs to."""
        from ..resolvers.employer import resolve_employee_employer

        return await resolve_employee_employer(self, info)

    @classmethod
    def from_record(cls, record: EmployeeRecord) -> "Employee":
        return cls(
            id=record.id,
            employer_id=record.employer_id,
            name=record.name,
            email=record.email,
            photo_url=record.photo_url,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
