"""Typed event topics layered over a broker."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from typing import Generic, TypeVar

from ..logging import get_logger
from ..records.models import EmployeeRecord, EmployerRecord
from .broker import EventBroker
from .models import ChangeEnvelope, EntityT, EventKind

logger = get_logger(__name__)

SourceT = TypeVar("SourceT")
ResultT = TypeVar("ResultT")

EMPLOYEE_CHANGE_TOPIC = "EMPLOYEE_CHANGE_TOPIC"
EMPLOYER_CHANGE_TOPIC = "EMPLOYER_CHANGE_TOPIC"


async def map_async_iterator(
    source: AsyncGenerator[SourceT, None], fn: Callable[[SourceT], ResultT]
) -> AsyncGenerator[ResultT, None]:
    """Apply ``fn`` to every value of ``source``, closing ``source`` when done."""
    try:
        async for value in source:
            yield fn(value)
    finally:
        await source.aclose()


class Topic(Generic[EntityT]):
    """One entity type's change stream on a single fixed broker channel.

    Every subscriber sees every envelope published while it is listening, in
    publish order. Nothing is routed on payload content here; callers that
    only want some entities filter the stream themselves.
    """

    def __init__(self, identifier: str, model: type[EntityT], broker: EventBroker) -> None:
        self.identifier = identifier
        self.model = model
        self._broker = broker
        self._envelope_type = ChangeEnvelope[model]  # type: ignore[valid-type]

    async def publish(self, entity: EntityT, event: EventKind) -> None:
        """Broadcast ``entity`` tagged with ``event``. Never raises."""
        envelope = self._envelope_type(entity=entity, event=event)
        try:
            await self._broker.publish(self.identifier, envelope.model_dump_json())
        except Exception as e:
            logger.error(
                "Failed to publish change event",
                topic=self.identifier,
                kind=event.value,
                error=str(e),
            )
            return

        logger.info("Change event published", topic=self.identifier, kind=event.value)

    async def listen(self) -> AsyncGenerator[ChangeEnvelope[EntityT], None]:
        """Stream envelopes published from now on."""
        stream = self._broker.subscribe(self.identifier)
        try:
            async for raw in stream:
                yield self._envelope_type.model_validate_json(raw)
        finally:
            await stream.aclose()

    def subscribe(self) -> AsyncGenerator[EntityT, None]:
        """Stream the entities published from now on, dropping the event tag."""
        return map_async_iterator(self.listen(), self._unwrap)

    def _unwrap(self, envelope: ChangeEnvelope[EntityT]) -> EntityT:
        logger.info("Change event received", topic=self.identifier, reason=envelope.event.value)
        return envelope.entity


class Topics:
    """The topics served by one application, all sharing one broker."""

    def __init__(self, broker: EventBroker) -> None:
        self.broker = broker
        self.employee: Topic[EmployeeRecord] = Topic(
            EMPLOYEE_CHANGE_TOPIC, EmployeeRecord, broker
        )
        self.employer: Topic[EmployerRecord] = Topic(
            EMPLOYER_CHANGE_TOPIC, EmployerRecord, broker
        )
