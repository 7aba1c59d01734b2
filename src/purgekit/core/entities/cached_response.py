"""Cached response entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class CachedResponse:
    """Immutable HTTP response held by the in-memory proxy.

    Header names are stored as given; lookups through ``header()`` are
    case-insensitive like HTTP itself.
    """

    url: str
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def header(self, name: str) -> str | None:
        """Return a header value by case-insensitive name.

        Args:
            name: The header name.

        Returns:
            The header value, or None if the response lacks it.
        """
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None
