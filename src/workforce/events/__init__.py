"""
Change events for employees and employers.

Mutations publish envelopes on a topic; subscriptions read them back as a
stream. The broker underneath is owned by the application.
"""

from .broker import EventBroker, InMemoryBroker, RedisBroker, create_broker
from .models import ChangeEnvelope, EventKind
from .topic import Topic, Topics, map_async_iterator

__all__ = [
    "ChangeEnvelope",
    "EventBroker",
    "EventKind",
    "InMemoryBroker",
    "RedisBroker",
    "Topic",
    "Topics",
    "create_broker",
    "map_async_iterator",
]
