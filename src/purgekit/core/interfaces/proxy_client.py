"""Proxy client interface."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IProxyClient(Protocol):
    """Contract every caching proxy client fulfils.

    Clients queue invalidation requests and send them on ``flush()``.
    Which requests a client accepts is declared by the capability
    protocols in ``purgekit.core.interfaces.capabilities``.
    """

    def flush(self) -> int:
        """Send all queued invalidation requests.

        Returns:
            The number of invalidation requests performed.

        Raises:
            ExceptionCollection: If one or more requests failed.
        """
        ...
