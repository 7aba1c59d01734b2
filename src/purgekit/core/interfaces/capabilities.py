"""Capability interfaces for proxy clients.

A proxy client supports an invalidation operation when it provides the
methods of the matching protocol. The protocols are runtime checkable so
support is decided by the presence of these methods on the client.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class IPurgeCapable(Protocol):
    """Client that can purge single URLs."""

    def purge(self, url: str, headers: Mapping[str, str] | None = None) -> "IPurgeCapable":
        """Queue a purge of a path or absolute URL.

        Args:
            url: Path or absolute URL to purge.
            headers: Extra HTTP headers to send with the request.

        Returns:
            The client itself.
        """
        ...


@runtime_checkable
class IRefreshCapable(Protocol):
    """Client that can force a fresh copy of a URL into the cache."""

    def refresh(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> "IRefreshCapable":
        """Queue a refresh of a path or absolute URL.

        Args:
            url: Path or absolute URL to refresh.
            headers: Extra HTTP headers to send with the request.

        Returns:
            The client itself.
        """
        ...


@runtime_checkable
class IBanCapable(Protocol):
    """Client that can invalidate every response matching expressions."""

    def ban(self, headers: Mapping[str, str]) -> "IBanCapable":
        """Queue a ban of responses whose headers match.

        Args:
            headers: Header names mapped to regular expressions, e.g.
                ``{"X-Host": r"^(www\\.)?(this|that)\\.com$"}``.

        Returns:
            The client itself.
        """
        ...

    def ban_path(
        self,
        path: str,
        content_type: str | None = None,
        hosts: str | Sequence[str] | None = None,
    ) -> "IBanCapable":
        """Queue a ban of URLs matching a path expression.

        Args:
            path: Regular expression for the URL path.
            content_type: Regular expression for the content type.
            hosts: Regular expression for the host, or a sequence of
                exact host names. None matches all hosts.

        Returns:
            The client itself.
        """
        ...


@runtime_checkable
class ITagCapable(Protocol):
    """Client that can invalidate responses by cache tag."""

    def invalidate_tags(self, tags: Sequence[str]) -> "ITagCapable":
        """Queue invalidation of every response carrying one of the tags.

        Args:
            tags: The tags to invalidate.

        Returns:
            The client itself.
        """
        ...


@runtime_checkable
class IClearCapable(Protocol):
    """Client that can drop the whole cache."""

    def clear(self) -> "IClearCapable":
        """Queue removal of every cached response."""
        ...
