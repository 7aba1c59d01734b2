"""Infrastructure layer implementations for purgekit."""

from purgekit.infrastructure.dispatchers import EventDispatcher
from purgekit.infrastructure.proxy_clients import (
    InMemoryProxyClient,
    MultiplexerProxyClient,
    NoopProxyClient,
)
from purgekit.infrastructure.subscribers import LogSubscriber

__all__ = [
    "EventDispatcher",
    "LogSubscriber",
    "InMemoryProxyClient",
    "MultiplexerProxyClient",
    "NoopProxyClient",
]
