"""purgekit - HTTP cache invalidation for Python applications.

Coordinates cache invalidation against one caching proxy through a
single facade. Callers purge paths, ban by header expressions, refresh,
clear or invalidate tags without knowing which proxy is in use; the
facade checks the proxy client's capabilities, queues requests on it
and reports flush errors as events.

Example:
    from purgekit import (
        CacheInvalidator,
        Events,
        InMemoryProxyClient,
        LogSubscriber,
        Operation,
    )

    proxy = InMemoryProxyClient()
    invalidator = CacheInvalidator(proxy)
    invalidator.get_event_dispatcher().add_subscriber(LogSubscriber())

    if invalidator.supports(Operation.TAGS):
        invalidator.invalidate_tags(["user-42"])

    invalidator.invalidate_path("/users/42").invalidate_regex(r"^/feeds/")
    count = invalidator.flush()

Handling flush errors:
    from purgekit import ExceptionCollection

    try:
        invalidator.flush()
    except ExceptionCollection as errors:
        for error in errors:
            ...
"""

from purgekit.core.entities import (
    CachedResponse,
    Event,
    Events,
    InMemoryProxyConfig,
    Operation,
)
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
from purgekit.infrastructure import (
    EventDispatcher,
    InMemoryProxyClient,
    LogSubscriber,
    MultiplexerProxyClient,
    NoopProxyClient,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "Operation",
    "Event",
    "Events",
    "CachedResponse",
    "InMemoryProxyConfig",
    # Exceptions
    "HttpCacheError",
    "InvalidArgumentError",
    "UnsupportedProxyOperationError",
    "ProxyResponseError",
    "ProxyUnreachableError",
    "ExceptionCollection",
    # Core interfaces
    "IProxyClient",
    "IPurgeCapable",
    "IRefreshCapable",
    "IBanCapable",
    "ITagCapable",
    "IClearCapable",
    "IEventDispatcher",
    # Core services
    "CacheInvalidator",
    # Infrastructure implementations
    "EventDispatcher",
    "LogSubscriber",
    "InMemoryProxyClient",
    "MultiplexerProxyClient",
    "NoopProxyClient",
]
