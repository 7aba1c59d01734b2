"""Event dispatcher implementations."""

from purgekit.infrastructure.dispatchers.event_dispatcher import (
    EventDispatcher,
    EventSubscriber,
)

__all__ = ["EventDispatcher", "EventSubscriber"]
