"""Cache invalidator - main entry point for HTTP cache invalidation."""

import logging
import threading
from collections.abc import Mapping, Sequence

from purgekit.core.entities.event import Event, Events
from purgekit.core.entities.operation import Operation
from purgekit.core.exceptions import (
    ExceptionCollection,
    InvalidArgumentError,
    ProxyResponseError,
    ProxyUnreachableError,
    UnsupportedProxyOperationError,
)
from purgekit.core.interfaces.capabilities import (
    IBanCapable,
    IClearCapable,
    IPurgeCapable,
    IRefreshCapable,
    ITagCapable,
)
from purgekit.core.interfaces.event_dispatcher import IEventDispatcher
from purgekit.core.interfaces.proxy_client import IProxyClient

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """Domain service that manages HTTP cache invalidation.

    Wraps a single proxy client and exposes the invalidation operations
    independently of the caching proxy in use. Each operation checks that
    the client has the required capability before forwarding the request.
    Requests are sent when ``flush()`` is called; failures during flush are
    dispatched as events and then raised to the caller.
    """

    def __init__(self, cache: IProxyClient) -> None:
        """Initialize the cache invalidator.

        Args:
            cache: The proxy client that sends invalidation requests.
        """
        self._cache = cache
        self._event_dispatcher: IEventDispatcher | None = None
        self._dispatcher_lock = threading.Lock()

    @property
    def cache(self) -> IProxyClient:
        """Get the wrapped proxy client."""
        return self._cache

    def supports(self, operation: Operation | str) -> bool:
        """Check whether the proxy client supports an operation.

        PATH means ``invalidate_path`` works, REFRESH means ``refresh_path``
        works, INVALIDATE covers ``invalidate`` and ``invalidate_regex``,
        TAGS means ``invalidate_tags`` works and CLEAR means ``clear_cache``
        works.

        Args:
            operation: An Operation member or its string value.

        Returns:
            True if the operation is supported.

        Raises:
            InvalidArgumentError: If the operation is unknown.
        """
        try:
            operation = Operation(operation)
        except ValueError:
            raise InvalidArgumentError(f"Unknown operation {operation!r}") from None

        if operation is Operation.PATH:
            return isinstance(self._cache, IPurgeCapable)
        if operation is Operation.REFRESH:
            return isinstance(self._cache, IRefreshCapable)
        if operation is Operation.INVALIDATE:
            return isinstance(self._cache, IBanCapable)
        if operation is Operation.TAGS:
            supported = isinstance(self._cache, ITagCapable)
            # In-memory proxy tags also need its tag store library
            from purgekit.infrastructure.proxy_clients.memory import (
                InMemoryProxyClient,
            )

            if supported and isinstance(self._cache, InMemoryProxyClient):
                return InMemoryProxyClient.tag_store_available()
            return supported
        if operation is Operation.CLEAR:
            return isinstance(self._cache, IClearCapable)

        raise InvalidArgumentError(f"Unknown operation {operation!r}")

    def set_event_dispatcher(self, event_dispatcher: IEventDispatcher) -> None:
        """Set the event dispatcher. May only be called once.

        To use a custom dispatcher, set it right after creating the
        invalidator and before anything calls ``get_event_dispatcher()``.

        Args:
            event_dispatcher: The dispatcher to notify about flush errors.

        Raises:
            RuntimeError: If a dispatcher is already set.
        """
        with self._dispatcher_lock:
            if self._event_dispatcher is not None:
                raise RuntimeError(
                    "You may not change the event dispatcher once it is set."
                )
            self._event_dispatcher = event_dispatcher

    def get_event_dispatcher(self) -> IEventDispatcher:
        """Get the event dispatcher, creating the default one if unset.

        Returns:
            The event dispatcher used for flush error notifications.
        """
        with self._dispatcher_lock:
            if self._event_dispatcher is None:
                from purgekit.infrastructure.dispatchers.event_dispatcher import (
                    EventDispatcher,
                )

                self._event_dispatcher = EventDispatcher()
            return self._event_dispatcher

    def invalidate_path(
        self,
        path: str,
        headers: Mapping[str, str] | None = None,
    ) -> "CacheInvalidator":
        """Invalidate a path or URL.

        Args:
            path: Path or absolute URL.
            headers: Optional HTTP headers to send with the request.

        Returns:
            The invalidator itself.

        Raises:
            UnsupportedProxyOperationError: If the client cannot purge.
        """
        if not isinstance(self._cache, IPurgeCapable):
            raise UnsupportedProxyOperationError.cache_does_not_implement("PURGE")

        logger.debug("Purging %s", path)
        self._cache.purge(path, dict(headers or {}))
        return self

    def refresh_path(
        self,
        path: str,
        headers: Mapping[str, str] | None = None,
    ) -> "CacheInvalidator":
        """Refresh a path or URL.

        Args:
            path: Path or absolute URL.
            headers: Optional HTTP headers to send with the request.

        Returns:
            The invalidator itself.

        Raises:
            UnsupportedProxyOperationError: If the client cannot refresh.
        """
        if not isinstance(self._cache, IRefreshCapable):
            raise UnsupportedProxyOperationError.cache_does_not_implement("REFRESH")

        logger.debug("Refreshing %s", path)
        self._cache.refresh(path, dict(headers or {}))
        return self

    def invalidate(self, headers: Mapping[str, str]) -> "CacheInvalidator":
        """Invalidate all cached responses matching the given headers.

        Each header value is a regular expression, for example
        ``{"X-Host": r"^(www\\.)?(this|that)\\.com$"}``.

        Args:
            headers: Header names mapped to the expressions they must match.

        Returns:
            The invalidator itself.

        Raises:
            UnsupportedProxyOperationError: If the client cannot ban.
        """
        if not isinstance(self._cache, IBanCapable):
            raise UnsupportedProxyOperationError.cache_does_not_implement("BAN")

        logger.debug("Banning responses matching %s", dict(headers))
        self._cache.ban(dict(headers))
        return self

    def invalidate_tags(self, tags: Sequence[str]) -> "CacheInvalidator":
        """Remove or expire cached responses by tag.

        An empty tag list is ignored.

        Args:
            tags: Tags whose responses should be invalidated.

        Returns:
            The invalidator itself.

        Raises:
            UnsupportedProxyOperationError: If the client cannot invalidate
                tags.
        """
        if not tags:
            return self
        if not isinstance(self._cache, ITagCapable):
            raise UnsupportedProxyOperationError.cache_does_not_implement("Tags")

        logger.debug("Invalidating tags %s", list(tags))
        self._cache.invalidate_tags(list(tags))
        return self

    def invalidate_regex(
        self,
        path: str,
        content_type: str | None = None,
        hosts: str | Sequence[str] | None = None,
    ) -> "CacheInvalidator":
        """Invalidate URLs matching a regular expression.

        The hosts parameter is either a regular expression such as
        ``r"^(www\\.)?(this|that)\\.com$"`` or a list of exact host names
        such as ``["example.com", "other.net"]``. If empty, all hosts match.

        Args:
            path: Regular expression for the URL path.
            content_type: Regular expression for the content type, for
                instance ``"text"``.
            hosts: Host expression or list of exact host names.

        Returns:
            The invalidator itself.

        Raises:
            UnsupportedProxyOperationError: If the client cannot ban.
        """
        if not isinstance(self._cache, IBanCapable):
            raise UnsupportedProxyOperationError.cache_does_not_implement("BAN")

        logger.debug("Banning path %s", path)
        self._cache.ban_path(path, content_type, hosts)
        return self

    def clear_cache(self) -> "CacheInvalidator":
        """Clear the cache completely.

        Returns:
            The invalidator itself.

        Raises:
            UnsupportedProxyOperationError: If the client cannot clear.
        """
        if not isinstance(self._cache, IClearCapable):
            raise UnsupportedProxyOperationError.cache_does_not_implement("CLEAR")

        logger.debug("Clearing cache")
        self._cache.clear()
        return self

    def flush(self) -> int:
        """Send all pending invalidation requests.

        Returns:
            The number of invalidation requests performed.

        Raises:
            ExceptionCollection: If any errors occurred during flush. Each
                proxy error is dispatched as an event before raising.
        """
        try:
            return self._cache.flush()
        except ExceptionCollection as exceptions:
            logger.warning("Flush failed with %d error(s)", len(exceptions))
            for exception in exceptions:
                self._dispatch_error(exception)
            raise

    def _dispatch_error(self, exception: BaseException) -> None:
        """Dispatch a flush error under the event name for its kind.

        Errors that are neither response nor connection errors are not
        dispatched.

        Args:
            exception: The error from the collection.
        """
        if isinstance(exception, ProxyResponseError):
            event_name = Events.PROXY_RESPONSE_ERROR
        elif isinstance(exception, ProxyUnreachableError):
            event_name = Events.PROXY_UNREACHABLE_ERROR
        else:
            return

        self.get_event_dispatcher().dispatch(Event(exception=exception), event_name)
