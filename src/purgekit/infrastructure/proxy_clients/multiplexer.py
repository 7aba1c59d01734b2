"""Proxy client forwarding invalidations to several clients."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from purgekit.core.exceptions import ExceptionCollection, InvalidArgumentError
from purgekit.core.interfaces.capabilities import (
    IBanCapable,
    IClearCapable,
    IPurgeCapable,
    IRefreshCapable,
    ITagCapable,
)
from purgekit.core.interfaces.proxy_client import IProxyClient

logger = logging.getLogger(__name__)


class MultiplexerProxyClient:
    """Proxy client that fans requests out to a list of clients.

    Declares every capability. Each request is forwarded to the wrapped
    clients that support it and silently skipped for the others. On
    flush, every client is flushed; errors from all clients are merged
    into one ExceptionCollection.
    """

    def __init__(self, clients: Sequence[IProxyClient]) -> None:
        """Initialize the multiplexer.

        Args:
            clients: The proxy clients to forward requests to.

        Raises:
            InvalidArgumentError: If no client is given or an item is not
                a proxy client.
        """
        if not clients:
            raise InvalidArgumentError("MultiplexerProxyClient needs at least one client")
        for client in clients:
            if not isinstance(client, IProxyClient):
                raise InvalidArgumentError(
                    f"Expected a proxy client, got {type(client).__name__}"
                )
        self._clients = list(clients)

    @property
    def clients(self) -> list[IProxyClient]:
        """Get the wrapped clients."""
        return list(self._clients)

    def purge(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> "MultiplexerProxyClient":
        self._invoke(IPurgeCapable, "purge", url, headers)
        return self

    def refresh(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> "MultiplexerProxyClient":
        self._invoke(IRefreshCapable, "refresh", url, headers)
        return self

    def ban(self, headers: Mapping[str, str]) -> "MultiplexerProxyClient":
        self._invoke(IBanCapable, "ban", headers)
        return self

    def ban_path(
        self,
        path: str,
        content_type: str | None = None,
        hosts: str | Sequence[str] | None = None,
    ) -> "MultiplexerProxyClient":
        self._invoke(IBanCapable, "ban_path", path, content_type, hosts)
        return self

    def invalidate_tags(self, tags: Sequence[str]) -> "MultiplexerProxyClient":
        self._invoke(ITagCapable, "invalidate_tags", tags)
        return self

    def clear(self) -> "MultiplexerProxyClient":
        self._invoke(IClearCapable, "clear")
        return self

    def flush(self) -> int:
        """Flush every wrapped client.

        Every client is flushed, even after an earlier one failed.

        Returns:
            The sum of the invalidation counts of all clients.

        Raises:
            ExceptionCollection: The errors of all failed clients, in
                client order. A client error raised outside a collection
                is added as is.
        """
        count = 0
        errors = ExceptionCollection()

        for client in self._clients:
            try:
                count += client.flush()
            except ExceptionCollection as exceptions:
                errors.extend(exceptions)
            except Exception as exc:
                logger.warning("Flushing %s failed: %s", type(client).__name__, exc)
                errors.add(exc)

        if len(errors):
            raise errors

        return count

    def _invoke(self, capability: type, method: str, *args: Any) -> None:
        for client in self._clients:
            if isinstance(client, capability):
                getattr(client, method)(*args)
            else:
                logger.debug(
                    "Skipping %s for %s, capability not implemented",
                    method,
                    type(client).__name__,
                )
