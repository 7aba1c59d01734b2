"""Core interfaces (Protocol classes) for purgekit."""

from purgekit.core.interfaces.capabilities import (
    IBanCapable,
    IClearCapable,
    IPurgeCapable,
    IRefreshCapable,
    ITagCapable,
)
from purgekit.core.interfaces.event_dispatcher import IEventDispatcher, Listener
from purgekit.core.interfaces.proxy_client import IProxyClient

__all__ = [
    "IProxyClient",
    "IPurgeCapable",
    "IRefreshCapable",
    "IBanCapable",
    "ITagCapable",
    "IClearCapable",
    "IEventDispatcher",
    "Listener",
]
