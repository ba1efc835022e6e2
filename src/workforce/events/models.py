"""Pydantic models for change envelopes."""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel

EntityT = TypeVar("EntityT", bound=BaseModel)


class EventKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ChangeEnvelope(BaseModel, Generic[EntityT]):
    """An entity snapshot tagged with the kind of change that produced it."""

    entity: EntityT
    event: EventKind
