"""In-memory proxy configuration entity."""

from dataclasses import dataclass
from datetime import timedelta

from purgekit.core.exceptions import InvalidArgumentError


@dataclass
class InMemoryProxyConfig:
    """Configuration of the in-process HTTP cache proxy client.

    Responses are kept in a bounded store with a shared TTL. Tags are
    read from a response header. The tag index follows the response
    store, so it has no size or TTL of its own.
    """

    maxsize: int = 1000
    default_ttl: timedelta | None = None

    # Tagging
    tags_header: str = "X-Cache-Tags"
    tags_separator: str = ","

    def __post_init__(self) -> None:
        """Fill in the default TTL and validate sizes."""
        if self.default_ttl is None:
            self.default_ttl = timedelta(minutes=5)
        if self.maxsize <= 0:
            raise InvalidArgumentError(f"maxsize must be positive, got {self.maxsize}")
        if not self.tags_separator:
            raise InvalidArgumentError("tags_separator must not be empty")
