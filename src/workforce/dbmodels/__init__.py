"""
Database models for Workforce (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    DateTime,
    ForeignKeyConstraint,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Employers(Base):
    __tablename__ = "employers"
    __table_args__ = (PrimaryKeyConstraint("id", name="employers_pkey"),)

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True),
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )

    employees: Mapped[list["Employees"]] = relationship(
        "Employees", uselist=True, back_populates="employer", passive_deletes="all"
    )


class Employees(Base):
    __tablename__ = "employees"
    __table_args__ = (
        ForeignKeyConstraint(
            ["employer_id"],
            ["employers.id"],
            ondelete="RESTRICT",
            name="employees_employer_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="employees_pkey"),
        Index("idx_employees_employer", "employer_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    employer_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    photo_url: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True),
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )

    employer: Mapped["Employers"] = relationship("Employers", back_populates="employees")


target_metadata = Base.metadata

__all__ = ["Base", "Employers", "Employees", "target_metadata"]
