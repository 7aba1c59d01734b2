"""Proxy client that does nothing."""

from collections.abc import Mapping, Sequence


class NoopProxyClient:
    """Proxy client accepting every invalidation and sending none.

    Use it where the invalidation API is required but no caching proxy
    is deployed, for example in development or tests.
    """

    def purge(self, url: str, headers: Mapping[str, str] | None = None) -> "NoopProxyClient":
        """Accept a purge request and discard it.

        Args:
            url: The URL to purge.
            headers: Optional request headers.

        Returns:
            The client itself.
        """
        return self

    def refresh(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> "NoopProxyClient":
        """Accept a refresh request and discard it.

        Args:
            url: The URL to refresh.
            headers: Optional request headers.

        Returns:
            The client itself.
        """
        return self

    def ban(self, headers: Mapping[str, str]) -> "NoopProxyClient":
        """Accept a ban request and discard it.

        Args:
            headers: Header names mapped to regular expressions.

        Returns:
            The client itself.
        """
        return self

    def ban_path(
        self,
        path: str,
        content_type: str | None = None,
        hosts: str | Sequence[str] | None = None,
    ) -> "NoopProxyClient":
        """Accept a path ban request and discard it.

        Args:
            path: Expression for the path.
            content_type: Optional expression for the content type.
            hosts: Optional host expression or list of host names.

        Returns:
            The client itself.
        """
        return self

    def invalidate_tags(self, tags: Sequence[str]) -> "NoopProxyClient":
        """Accept a tag invalidation request and discard it.

        Args:
            tags: Tags to invalidate.

        Returns:
            The client itself.
        """
        return self

    def clear(self) -> "NoopProxyClient":
        """Accept a clear request and discard it.

        Returns:
            The client itself.
        """
        return self

    def flush(self) -> int:
        """Flush nothing.

        Returns:
            Always 0, since no request is ever sent.
        """
        return 0
