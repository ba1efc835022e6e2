"""
Workforce GraphQL API
Employee and employer records with live change subscriptions
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
