"""
Accessors for the per-request GraphQL context
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ..events import Topics
    from .loaders import Loaders


def get_topics(info: strawberry.Info) -> Topics:
    """Get the application's event topics from the resolver context."""
    return info.context["topics"]


def get_loaders(info: strawberry.Info) -> Loaders:
    """Get the request-scoped data loaders from the resolver context."""
    return info.context["loaders"]
