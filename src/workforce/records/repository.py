"""Repository helpers for employee and employer rows."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Employees, Employers

EMPLOYER_UPDATABLE = frozenset({"name"})
EMPLOYEE_UPDATABLE = frozenset({"name", "email", "photo_url", "employer_id"})


def _check_columns(changes: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Cannot update column(s): {', '.join(sorted(unknown))}")


# Employers
async def get_employer(session: AsyncSession, employer_id: UUID) -> Employers | None:
    stmt = select(Employers).where(Employers.id == employer_id)
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def get_employers(session: AsyncSession, employer_ids: list[UUID]) -> list[Employers]:
    stmt = select(Employers).where(Employers.id.in_(employer_ids))
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def list_employers(session: AsyncSession, *, limit: int, offset: int) -> list[Employers]:
    stmt = select(Employers).order_by(Employers.created_at.asc()).limit(limit).offset(offset)
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def create_employer(session: AsyncSession, *, name: str) -> Employers:
    employer = Employers(name=name)
    session.add(employer)
    await session.flush()
    await session.refresh(employer)
    return employer


async def update_employer(
    session: AsyncSession, employer_id: UUID, **changes: Any
) -> Employers | None:
    """Apply ``changes`` to an employer. Only the given columns are written."""
    _check_columns(changes, EMPLOYER_UPDATABLE)
    employer = await get_employer(session, employer_id)
    if employer is None:
        return None

    for column, value in changes.items():
        setattr(employer, column, value)

    await session.flush()
    await session.refresh(employer)
    return employer


async def delete_employer(session: AsyncSession, employer_id: UUID) -> Employers | None:
    employer = await get_employer(session, employer_id)
    if employer is None:
        return None

    await session.delete(employer)
    await session.flush()
    return employer


# Employees
async def get_employee(session: AsyncSession, employee_id: UUID) -> Employees | None:
    stmt = select(Employees).where(Employees.id == employee_id)
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def list_employees(
    session: AsyncSession,
    *,
    employer_id: UUID | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Employees]:
    stmt = select(Employees).order_by(Employees.created_at.asc())
    if employer_id is not None:
        stmt = stmt.where(Employees.employer_id == employer_id)
    if limit is not None:
        stmt = stmt.limit(limit)
    stmt = stmt.offset(offset)
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def count_employees(session: AsyncSession, employer_id: UUID) -> int:
    stmt = select(func.count()).select_from(Employees).where(Employees.employer_id == employer_id)
    res = await session.execute(stmt)
    return res.scalar() or 0


async def create_employee(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    employer_id: UUID,
    photo_url: str | None = None,
) -> Employees:
    employee = Employees()
    employee.name = name
    employee.email = email
    employee.employer_id = employer_id
    employee.photo_url = photo_url
    session.add(employee)
    await session.flush()
    await session.refresh(employee)
    return employee


async def update_employee(
    session: AsyncSession, employee_id: UUID, **changes: Any
) -> Employees | None:
    """Apply ``changes`` to an employee.

    Only the given columns are written, so an explicit ``photo_url=None``
    clears the photo while an omitted one keeps it.
    """
    _check_columns(changes, EMPLOYEE_UPDATABLE)
    employee = await get_employee(session, employee_id)
    if employee is None:
        return None

    for column, value in changes.items():
        setattr(employee, column, value)

    await session.flush()
    await session.refresh(employee)
    return employee


async def delete_employee(session: AsyncSession, employee_id: UUID) -> Employees | None:
    employee = await get_employee(session, employee_id)
    if employee is None:
        return None

    await session.delete(employee)
    await session.flush()
    return employee
