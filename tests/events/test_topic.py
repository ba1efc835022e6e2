"""
Tests for typed event topics
"""

import asyncio
import uuid
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from workforce.events import ChangeEnvelope, EventKind, Topic, map_async_iterator
from workforce.events.topic import EMPLOYEE_CHANGE_TOPIC, EMPLOYER_CHANGE_TOPIC
from workforce.records.models import EmployeeRecord


def make_employee(**overrides) -> EmployeeRecord:
    now = datetime.now(UTC)
    fields = {
        "id": uuid.uuid4(),
        "employer_id": uuid.uuid4(),
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "photo_url": None,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return EmployeeRecord(**fields)


def next_in_background(stream):
    async def _next():
        return await anext(stream)

    return asyncio.create_task(_next())


class TestTopicPublish:
    """Tests for Topic.publish."""

    @pytest.mark.asyncio
    async def test_publish_sends_serialized_envelope_on_topic_channel(self):
        broker = MagicMock()
        broker.publish = AsyncMock()
        topic = Topic(EMPLOYEE_CHANGE_TOPIC, EmployeeRecord, broker)
        employee = make_employee()

        await topic.publish(employee, EventKind.CREATE)

        channel, payload = broker.publish.await_args.args
        assert channel == "EMPLOYEE_CHANGE_TOPIC"
        envelope = ChangeEnvelope[EmployeeRecord].model_validate_json(payload)
        assert envelope.event is EventKind.CREATE
        assert envelope.entity == employee

    @pytest.mark.asyncio
    async def test_publish_swallows_broker_errors(self):
        broker = MagicMock()
        broker.publish = AsyncMock(side_effect=ConnectionError("redis down"))
        topic = Topic(EMPLOYEE_CHANGE_TOPIC, EmployeeRecord, broker)

        # Must not raise: the write that triggered it has already committed
        await topic.publish(make_employee(), EventKind.DELETE)

        broker.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_publish_with_no_listeners_is_dropped(self, topics, broker):
        await topics.employee.publish(make_employee(), EventKind.CREATE)

        assert broker.subscriber_count(EMPLOYEE_CHANGE_TOPIC) == 0

    @pytest.mark.asyncio
    async def test_publish_logs_event_kind(self, topics, monkeypatch):
        capture = structlog.testing.LogCapture()
        monkeypatch.setattr(
            "workforce.events.topic.logger",
            structlog.wrap_logger(
                structlog.testing.CapturingLogger(),
                processors=[capture],
                wrapper_class=structlog.BoundLogger,
            ),
        )

        await topics.employee.publish(make_employee(), EventKind.UPDATE)

        assert capture.entries == [
            {
                "event": "Change event published",
                "topic": EMPLOYEE_CHANGE_TOPIC,
                "kind": "update",
                "log_level": "info",
            }
        ]


class TestTopicStreams:
    """Tests for Topic.listen and Topic.subscribe."""

    @pytest.mark.asyncio
    async def test_listen_yields_envelopes(self, topics, wait_for_subscribers):
        stream = topics.employee.listen()
        pending = next_in_background(stream)
        await wait_for_subscribers(EMPLOYEE_CHANGE_TOPIC)

        employee = make_employee()
        await topics.employee.publish(employee, EventKind.UPDATE)

        envelope = await asyncio.wait_for(pending, timeout=1)
        assert envelope.event is EventKind.UPDATE
        assert envelope.entity == employee
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_subscribe_yields_entities_in_publish_order(
        self, topics, wait_for_subscribers
    ):
        stream = topics.employee.subscribe()
        pending = next_in_background(stream)
        await wait_for_subscribers(EMPLOYEE_CHANGE_TOPIC)

        first = make_employee(name="First")
        second = make_employee(name="Second")
        await topics.employee.publish(first, EventKind.CREATE)
        await topics.employee.publish(second, EventKind.DELETE)

        assert await asyncio.wait_for(pending, timeout=1) == first
        assert await asyncio.wait_for(anext(stream), timeout=1) == second
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_every_subscriber_sees_each_event_once(self, topics, wait_for_subscribers):
        streams = [topics.employee.subscribe(), topics.employee.subscribe()]
        pending = [next_in_background(s) for s in streams]
        await wait_for_subscribers(EMPLOYEE_CHANGE_TOPIC, count=2)

        employee = make_employee()
        await topics.employee.publish(employee, EventKind.CREATE)

        assert await asyncio.wait_for(asyncio.gather(*pending), timeout=1) == [
            employee,
            employee,
        ]

        # Nothing else is queued for either subscriber
        for stream in streams:
            extra = next_in_background(stream)
            await asyncio.sleep(0)
            assert not extra.done()
            extra.cancel()
            with pytest.raises(asyncio.CancelledError):
                await extra

    @pytest.mark.asyncio
    async def test_late_subscriber_sees_no_earlier_events(
        self, topics, wait_for_subscribers
    ):
        for _ in range(3):
            await topics.employee.publish(make_employee(), EventKind.CREATE)

        stream = topics.employee.subscribe()
        pending = next_in_background(stream)
        await wait_for_subscribers(EMPLOYEE_CHANGE_TOPIC)

        fresh = make_employee(name="Fresh")
        await topics.employee.publish(fresh, EventKind.CREATE)

        assert await asyncio.wait_for(pending, timeout=1) == fresh
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_employee_and_employer_topics_do_not_cross(
        self, topics, broker, wait_for_subscribers
    ):
        stream = topics.employer.listen()
        pending = next_in_background(stream)
        await wait_for_subscribers(EMPLOYER_CHANGE_TOPIC)

        await topics.employee.publish(make_employee(), EventKind.CREATE)
        await asyncio.sleep(0)

        assert not pending.done()
        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending
        assert broker.subscriber_count(EMPLOYER_CHANGE_TOPIC) == 0

    @pytest.mark.asyncio
    async def test_closing_subscription_releases_broker_listener(
        self, topics, broker, wait_for_subscribers
    ):
        stream = topics.employee.subscribe()
        pending = next_in_background(stream)
        await wait_for_subscribers(EMPLOYEE_CHANGE_TOPIC)

        await topics.employee.publish(make_employee(), EventKind.CREATE)
        await asyncio.wait_for(pending, timeout=1)
        await stream.aclose()

        assert broker.subscriber_count(EMPLOYEE_CHANGE_TOPIC) == 0


class TestMapAsyncIterator:
    """Tests for map_async_iterator."""

    @pytest.mark.asyncio
    async def test_maps_values(self):
        async def numbers():
            for n in (1, 2, 3):
                yield n

        result = [value async for value in map_async_iterator(numbers(), lambda n: n * 10)]

        assert result == [10, 20, 30]

    @pytest.mark.asyncio
    async def test_closing_mapped_iterator_closes_source(self):
        closed = []

        async def endless():
            try:
                while True:
                    yield "tick"
            finally:
                closed.append(True)

        mapped = map_async_iterator(endless(), str.upper)
        assert await anext(mapped) == "TICK"
        await mapped.aclose()

        assert closed == [True]
