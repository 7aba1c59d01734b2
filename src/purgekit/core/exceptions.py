"""Exception hierarchy for purgekit."""

from collections.abc import Iterable, Iterator


class HttpCacheError(Exception):
    """Base class for all purgekit errors."""


class InvalidArgumentError(HttpCacheError, ValueError):
    """Raised when a caller passes an argument the library cannot handle."""


class UnsupportedProxyOperationError(HttpCacheError):
    """Raised when the proxy client lacks the capability for an operation.

    Attributes:
        method: The low-level verb that is not implemented (e.g. ``"BAN"``).
    """

    def __init__(self, message: str, method: str | None = None) -> None:
        super().__init__(message)
        self.method = method

    @classmethod
    def cache_does_not_implement(cls, method: str) -> "UnsupportedProxyOperationError":
        """Create an error for a verb the HTTP cache does not implement.

        Args:
            method: The verb, e.g. ``"PURGE"`` or ``"Tags"``.

        Returns:
            A new UnsupportedProxyOperationError.
        """
        return cls(f"HTTP cache does not implement {method}", method=method)


class ProxyResponseError(HttpCacheError):
    """The caching proxy was reached but answered with an error."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    @classmethod
    def proxy_response(
        cls,
        url: str,
        status_code: int | None,
        reason: str,
    ) -> "ProxyResponseError":
        """Create an error describing a rejected invalidation request.

        Args:
            url: The URL or expression the request targeted.
            status_code: Status reported by the proxy, if any.
            reason: Human readable reason for the rejection.

        Returns:
            A new ProxyResponseError.
        """
        status = f" with status {status_code}" if status_code is not None else ""
        return cls(
            f"{reason} (request for {url} rejected{status})",
            url=url,
            status_code=status_code,
        )


class ProxyUnreachableError(HttpCacheError):
    """The caching proxy could not be reached at all."""

    def __init__(self, message: str, host: str | None = None) -> None:
        super().__init__(message)
        self.host = host

    @classmethod
    def proxy_unreachable(cls, host: str, reason: str) -> "ProxyUnreachableError":
        """Create an error for a proxy that did not answer.

        Args:
            host: The proxy host that was contacted.
            reason: Why the connection failed.

        Returns:
            A new ProxyUnreachableError.
        """
        return cls(f"Could not connect to caching proxy {host}: {reason}", host=host)


class ExceptionCollection(HttpCacheError):
    """Ordered collection of errors raised by a single flush.

    Proxy clients collect every failure of a flush into one collection so
    that no failure is lost when several requests fail independently.
    """

    def __init__(
        self,
        exceptions: Iterable[BaseException] | None = None,
        message: str = "",
    ) -> None:
        self._exceptions: list[BaseException] = list(exceptions or [])
        super().__init__(message or self._describe())

    def add(self, exception: BaseException) -> "ExceptionCollection":
        """Append an error to the collection.

        Args:
            exception: The error to add.

        Returns:
            The collection itself.
        """
        self._exceptions.append(exception)
        self.args = (self._describe(),)
        return self

    def extend(self, exceptions: Iterable[BaseException]) -> "ExceptionCollection":
        """Append every error of another iterable, preserving order."""
        for exception in exceptions:
            self.add(exception)
        return self

    @property
    def first(self) -> BaseException | None:
        """Return the first collected error, or None when empty."""
        return self._exceptions[0] if self._exceptions else None

    def __iter__(self) -> Iterator[BaseException]:
        return iter(list(self._exceptions))

    def __len__(self) -> int:
        return len(self._exceptions)

    def __bool__(self) -> bool:
        # Truthy even when empty
        return True

    def _describe(self) -> str:
        count = len(self._exceptions)
        if count == 0:
            return "No errors collected"
        if count == 1:
            return f"1 error during flush: {self._exceptions[0]}"
        return f"{count} errors during flush, first: {self._exceptions[0]}"
