"""In-memory HTTP cache proxy client."""

import logging
import re
import threading
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from importlib.util import find_spec
from urllib.parse import SplitResult, urlsplit

from cachetools import TTLCache  # type: ignore[import-untyped]

from purgekit.core.entities.cached_response import CachedResponse
from purgekit.core.entities.proxy_config import InMemoryProxyConfig
from purgekit.core.exceptions import ExceptionCollection, ProxyResponseError

logger = logging.getLogger(__name__)


@dataclass
class _QueuedRequest:
    """Invalidation request waiting for flush."""

    method: str
    target: str
    apply: Callable[[], None]


class _ResponseStore(TTLCache):  # type: ignore[misc]
    """TTLCache that reports every response it evicts or expires."""

    def __init__(
        self,
        maxsize: int,
        ttl: float,
        timer: Callable[[], float],
        on_evict: Callable[[str, CachedResponse], None],
    ) -> None:
        self._on_evict = on_evict
        super().__init__(maxsize=maxsize, ttl=ttl, timer=timer)

    def popitem(self) -> tuple[str, CachedResponse]:
        url, response = super().popitem()
        self._on_evict(url, response)
        return url, response

    def expire(self, time: float | None = None) -> list[tuple[str, CachedResponse]]:
        expired = super().expire(time)
        for url, response in expired:
            self._on_evict(url, response)
        return expired


class InMemoryProxyClient:
    """Proxy client for an HTTP cache living in the application process.

    The client owns the response store: the application puts responses
    in with ``store()`` and serves them with ``lookup()``. Purge, ban,
    tag and clear requests are queued and applied on ``flush()``.
    Refreshing is not supported since the store cannot fetch content.

    Ban expressions use the pseudo headers ``X-Url`` (path and query),
    ``X-Host`` and ``X-Content-Type``; any other name is matched against
    the stored response header of that name.

    The tag index maps each tag to the URLs stored with it. Entries
    leave the index together with their response, whether it is
    removed, replaced, evicted for size or expired.
    """

    HTTP_HEADER_URL = "X-Url"
    HTTP_HEADER_HOST = "X-Host"
    HTTP_HEADER_CONTENT_TYPE = "X-Content-Type"

    TAG_STORE_MODULE = "cachetools"

    def __init__(
        self,
        config: InMemoryProxyConfig | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory proxy client.

        Args:
            config: Optional configuration. Uses defaults if not provided.
            timer: Clock used to expire responses, in seconds.
        """
        self._config = config or InMemoryProxyConfig()
        ttl = self._config.default_ttl.total_seconds()  # type: ignore[union-attr]

        self._tag_index: dict[str, set[str]] = {}
        self._responses = _ResponseStore(
            maxsize=self._config.maxsize,
            ttl=ttl,
            timer=timer,
            on_evict=self._unindex,
        )
        self._queue: list[_QueuedRequest] = []
        self._lock = threading.RLock()

    @staticmethod
    def tag_store_available() -> bool:
        """Check whether the library backing the response store can be loaded.

        The tag index is kept in step with the store through its eviction
        hooks, so tags only work when that library is present.

        Returns:
            True if tag invalidation can be used with this client.
        """
        return find_spec(InMemoryProxyClient.TAG_STORE_MODULE) is not None

    @property
    def config(self) -> InMemoryProxyConfig:
        """Get the client configuration."""
        return self._config

    @property
    def pending(self) -> int:
        """Get the number of queued requests."""
        with self._lock:
            return len(self._queue)

    def store(
        self,
        url: str,
        content: bytes,
        headers: Mapping[str, str] | None = None,
    ) -> CachedResponse:
        """Cache a response.

        Tags are read from the configured tags header. A response already
        stored under the URL is replaced along with its tags.

        Args:
            url: Path or absolute URL of the response.
            content: The response body.
            headers: The response headers.

        Returns:
            The stored response.
        """
        response = CachedResponse(url=url, content=content, headers=dict(headers or {}))
        tags = self._parse_tags(response.header(self._config.tags_header))
        if tags:
            response = replace(response, tags=tags)

        with self._lock:
            self._remove(url)
            self._responses[url] = response
            for tag in tags:
                self._tag_index.setdefault(tag, set()).add(url)

        return response

    def lookup(self, url: str) -> CachedResponse | None:
        """Get a cached response.

        Args:
            url: The URL the response was stored under.

        Returns:
            The response, or None if not cached or expired.
        """
        with self._lock:
            return self._responses.get(url)

    def purge(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> "InMemoryProxyClient":
        """Queue removal of a URL.

        A path without host removes that path on every host, unless a
        ``Host`` header restricts it.
        """
        host = {k.lower(): v for k, v in (headers or {}).items()}.get("host")
        self._queue_request("PURGE", url, lambda: self._purge(url, host))
        return self

    def ban(self, headers: Mapping[str, str]) -> "InMemoryProxyClient":
        """Queue removal of every response matching header expressions.

        Args:
            headers: Header names mapped to regular expressions. A response
                is banned only when all expressions match.

        Returns:
            The client itself.
        """
        expressions = dict(headers)
        target = ", ".join(f"{name}: {value}" for name, value in expressions.items())
        self._queue_request("BAN", target, lambda: self._ban(expressions))
        return self

    def ban_path(
        self,
        path: str,
        content_type: str | None = None,
        hosts: str | Sequence[str] | None = None,
    ) -> "InMemoryProxyClient":
        """Queue removal of responses whose path matches an expression.

        Args:
            path: Expression matched against path and query.
            content_type: Optional expression for the content type.
            hosts: Host expression, list of exact host names, or None
                for all hosts.

        Returns:
            The client itself.
        """
        headers = {self.HTTP_HEADER_URL: path}
        if content_type:
            headers[self.HTTP_HEADER_CONTENT_TYPE] = content_type
        if hosts:
            if not isinstance(hosts, str):
                hosts = "^(" + "|".join(re.escape(host) for host in hosts) + ")$"
            headers[self.HTTP_HEADER_HOST] = hosts

        return self.ban(headers)

    def invalidate_tags(self, tags: Sequence[str]) -> "InMemoryProxyClient":
        """Queue removal of every response stored with one of the tags.

        Args:
            tags: Tags to invalidate.

        Returns:
            The client itself.
        """
        tag_list = list(tags)
        self._queue_request(
            "TAGS", ",".join(tag_list), lambda: self._invalidate_tags(tag_list)
        )
        return self

    def clear(self) -> "InMemoryProxyClient":
        """Queue removal of every cached response.

        Returns:
            The client itself.
        """
        self._queue_request("CLEAR", "*", self._clear)
        return self

    def flush(self) -> int:
        """Apply all queued requests.

        Every queued request is attempted, even after another one failed.

        Returns:
            The number of requests applied.

        Raises:
            ExceptionCollection: If any request failed. Rejected requests
                appear as ProxyResponseError, other failures as raised.
                Requests that were applied stay applied.
        """
        with self._lock:
            queue, self._queue = self._queue, []

            count = 0
            errors = ExceptionCollection()
            for request in queue:
                try:
                    request.apply()
                except ProxyResponseError as exc:
                    errors.add(exc)
                    continue
                except Exception as exc:
                    logger.warning(
                        "Failed to apply %s %s: %s", request.method, request.target, exc
                    )
                    errors.add(exc)
                    continue
                logger.debug("Applied %s %s", request.method, request.target)
                count += 1

        if len(errors):
            raise errors

        return count

    def __len__(self) -> int:
        """Return the number of cached responses."""
        with self._lock:
            return len(self._responses)

    def _queue_request(
        self, method: str, target: str, apply: Callable[[], None]
    ) -> None:
        with self._lock:
            self._queue.append(_QueuedRequest(method=method, target=target, apply=apply))
        logger.debug("Queued %s %s", method, target)

    def _remove(self, url: str) -> None:
        response = self._responses.pop(url, None)
        if response is not None:
            self._unindex(url, response)

    def _unindex(self, url: str, response: CachedResponse) -> None:
        for tag in response.tags:
            urls = self._tag_index.get(tag)
            if urls is None:
                continue
            urls.discard(url)
            if not urls:
                del self._tag_index[tag]

    def _purge(self, url: str, host: str | None) -> None:
        parts = urlsplit(url)
        if parts.netloc:
            self._remove(url)
            return

        for key in list(self._responses.keys()):
            key_parts = urlsplit(key)
            if self._path_with_query(key_parts) != url and key != url:
                continue
            if host is not None and key_parts.netloc and key_parts.netloc != host:
                continue
            self._remove(key)

    def _ban(self, expressions: dict[str, str]) -> None:
        compiled: dict[str, re.Pattern[str]] = {}
        for name, expression in expressions.items():
            try:
                compiled[name] = re.compile(expression)
            except re.error as exc:
                raise ProxyResponseError.proxy_response(
                    url=expression,
                    status_code=None,
                    reason=f"Invalid ban expression for {name}: {exc}",
                ) from exc

        for key, response in list(self._responses.items()):
            if self._matches(response, compiled):
                self._remove(key)

    def _invalidate_tags(self, tags: list[str]) -> None:
        for tag in tags:
            # Expired responses may still be indexed until the store expires them
            for url in list(self._tag_index.get(tag, ())):
                self._remove(url)
            self._tag_index.pop(tag, None)

    def _clear(self) -> None:
        self._responses.clear()
        self._tag_index.clear()

    def _matches(
        self, response: CachedResponse, compiled: dict[str, re.Pattern[str]]
    ) -> bool:
        for name, pattern in compiled.items():
            value = self._ban_value(name, response)
            if value is None or not pattern.search(value):
                return False
        return True

    def _ban_value(self, name: str, response: CachedResponse) -> str | None:
        lowered = name.lower()
        if lowered == self.HTTP_HEADER_URL.lower():
            return self._path_with_query(urlsplit(response.url))
        if lowered == self.HTTP_HEADER_HOST.lower():
            return urlsplit(response.url).netloc or response.header("Host")
        if lowered == self.HTTP_HEADER_CONTENT_TYPE.lower():
            return response.header("Content-Type")
        return response.header(name)

    def _parse_tags(self, value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        tags = (tag.strip() for tag in value.split(self._config.tags_separator))
        return tuple(dict.fromkeys(tag for tag in tags if tag))

    @staticmethod
    def _path_with_query(parts: SplitResult) -> str:
        path = parts.path or "/"
        query = parts.query
        return f"{path}?{query}" if query else path
