"""Core domain layer for purgekit."""

from purgekit.core.entities import Event, Events, Operation
from purgekit.core.exceptions import (
    ExceptionCollection,
    HttpCacheError,
    InvalidArgumentError,
    ProxyResponseError,
    ProxyUnreachableError,
    UnsupportedProxyOperationError,
)
from purgekit.core.interfaces import (
    IBanCapable,
    IClearCapable,
    IEventDispatcher,
    IProxyClient,
    IPurgeCapable,
    IRefreshCapable,
    ITagCapable,
)
from purgekit.core.services import CacheInvalidator

__all__ = [
    # Entities
    "Operation",
    "Event",
    "Events",
    # Exceptions
    "HttpCacheError",
    "InvalidArgumentError",
    "UnsupportedProxyOperationError",
    "ProxyResponseError",
    "ProxyUnreachableError",
    "ExceptionCollection",
    # Interfaces
    "IProxyClient",
    "IPurgeCapable",
    "IRefreshCapable",
    "IBanCapable",
    "ITagCapable",
    "IClearCapable",
    "IEventDispatcher",
    # Services
    "CacheInvalidator",
]
