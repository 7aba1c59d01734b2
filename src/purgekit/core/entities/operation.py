"""Invalidation operation kinds."""

from enum import Enum


class Operation(Enum):
    """Kinds of invalidation a proxy client may support.

    Used as the lookup key for ``CacheInvalidator.supports()``.

    PATH: ``invalidate_path`` works (purge).
    REFRESH: ``refresh_path`` works.
    INVALIDATE: ``invalidate`` and ``invalidate_regex`` work (ban).
    TAGS: ``invalidate_tags`` works.
    CLEAR: ``clear_cache`` works.
    """

    PATH = "path"
    REFRESH = "refresh"
    INVALIDATE = "invalidate"
    TAGS = "tags"
    CLEAR = "clear"
