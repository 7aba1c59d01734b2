"""Event dispatcher interface."""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from purgekit.core.entities.event import Event

Listener = Callable[[Event, str, Any], None]


@runtime_checkable
class IEventDispatcher(Protocol):
    """Contract for the notification channel of the cache invalidator.

    The invalidator only needs ``dispatch``; listener registration is
    part of the contract so that callers can subscribe through the
    dispatcher returned by ``CacheInvalidator.get_event_dispatcher()``.
    """

    def dispatch(self, event: Event, event_name: str) -> Event:
        """Notify all listeners registered for an event name.

        Args:
            event: The event payload.
            event_name: The name listeners subscribed to.

        Returns:
            The event, possibly modified by listeners.
        """
        ...

    def add_listener(
        self,
        event_name: str,
        listener: Listener,
        priority: int = 0,
    ) -> None:
        """Register a listener for an event name.

        Args:
            event_name: The event to listen to.
            listener: Callable receiving ``(event, event_name, dispatcher)``.
            priority: Listeners with higher priority run first.
        """
        ...
