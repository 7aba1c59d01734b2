"""Domain entities for purgekit."""

from purgekit.core.entities.cached_response import CachedResponse
from purgekit.core.entities.event import Event, Events
from purgekit.core.entities.operation import Operation
from purgekit.core.entities.proxy_config import InMemoryProxyConfig

__all__ = [
    "Operation",
    "Event",
    "Events",
    "InMemoryProxyConfig",
    "CachedResponse",
]
