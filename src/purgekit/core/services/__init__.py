"""Domain services for purgekit."""

from purgekit.core.services.cache_invalidator import CacheInvalidator

__all__ = [
    "CacheInvalidator",
]
