"""Proxy client implementations."""

from purgekit.infrastructure.proxy_clients.memory import InMemoryProxyClient
from purgekit.infrastructure.proxy_clients.multiplexer import MultiplexerProxyClient
from purgekit.infrastructure.proxy_clients.noop import NoopProxyClient

__all__ = [
    "InMemoryProxyClient",
    "MultiplexerProxyClient",
    "NoopProxyClient",
]
