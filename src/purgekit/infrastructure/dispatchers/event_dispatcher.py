"""Default event dispatcher implementation.

Keeps an in-process listener registry per event name. Listeners are
called synchronously when an event is dispatched.
"""

import logging
from threading import Lock
from typing import Protocol, overload

from purgekit.core.entities.event import Event
from purgekit.core.interfaces.event_dispatcher import Listener

logger = logging.getLogger(__name__)


class EventSubscriber(Protocol):
    """Object that registers several listeners at once.

    ``get_subscribed_events()`` maps event names to the name of the
    listener method, or to a ``(method_name, priority)`` tuple.
    """

    def get_subscribed_events(self) -> dict[str, str | tuple[str, int]]: ...


class EventDispatcher:
    """Synchronous event dispatcher with listener priorities.

    Listeners are called with ``(event, event_name, dispatcher)``. Higher
    priorities run first; listeners of equal priority run in registration
    order. A listener may call ``event.stop_propagation()`` to skip the
    remaining listeners.
    """

    def __init__(self) -> None:
        """Initialize an empty dispatcher."""
        # event name -> priority -> listeners in registration order
        self._listeners: dict[str, dict[int, list[Listener]]] = {}
        self._sorted: dict[str, list[Listener]] = {}
        self._lock = Lock()

    def dispatch(self, event: Event, event_name: str) -> Event:
        """Notify all listeners registered for an event name.

        If a listener raises an exception, it is logged and the remaining
        listeners still run.

        Args:
            event: The event payload.
            event_name: The name listeners subscribed to.

        Returns:
            The event after all listeners ran.
        """
        listeners = self.get_listeners(event_name)
        logger.debug("Dispatching %s to %d listener(s)", event_name, len(listeners))

        for listener in listeners:
            if event.propagation_stopped:
                break
            try:
                listener(event, event_name, self)
            except Exception:
                logger.exception(
                    "Listener %s failed for %s",
                    getattr(listener, "__name__", repr(listener)),
                    event_name,
                )
        return event

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
        with self._lock:
            by_priority = self._listeners.setdefault(event_name, {})
            by_priority.setdefault(priority, []).append(listener)
            self._sorted.pop(event_name, None)
            total = sum(len(listeners) for listeners in by_priority.values())

        logger.debug(
            "Registered listener %s for %s (%d total)",
            getattr(listener, "__name__", repr(listener)),
            event_name,
            total,
        )

    def remove_listener(self, event_name: str, listener: Listener) -> None:
        """Unregister a listener. Unknown listeners are ignored.

        Args:
            event_name: The event the listener was registered for.
            listener: The listener to remove.
        """
        with self._lock:
            by_priority = self._listeners.get(event_name)
            if not by_priority:
                return

            for priority, listeners in list(by_priority.items()):
                if listener in listeners:
                    listeners.remove(listener)
                if not listeners:
                    del by_priority[priority]

            if not by_priority:
                del self._listeners[event_name]
            self._sorted.pop(event_name, None)

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        """Register every listener method a subscriber declares.

        Args:
            subscriber: Object exposing ``get_subscribed_events()``.
        """
        for event_name, params in subscriber.get_subscribed_events().items():
            if isinstance(params, str):
                method_name, priority = params, 0
            else:
                method_name, priority = params
            self.add_listener(event_name, getattr(subscriber, method_name), priority)

    @overload
    def get_listeners(self, event_name: str) -> list[Listener]: ...

    @overload
    def get_listeners(self, event_name: None = None) -> dict[str, list[Listener]]: ...

    def get_listeners(
        self, event_name: str | None = None
    ) -> list[Listener] | dict[str, list[Listener]]:
        """Get listeners sorted by descending priority.

        Args:
            event_name: Restrict to one event. If None, return a mapping
                of every event name to its sorted listeners.

        Returns:
            A list of listeners, or a dict of lists when no name is given.
        """
        with self._lock:
            if event_name is not None:
                if event_name not in self._listeners:
                    return []
                if event_name not in self._sorted:
                    self._sort_listeners(event_name)
                return list(self._sorted[event_name])

            for name in self._listeners:
                if name not in self._sorted:
                    self._sort_listeners(name)
            return {name: list(self._sorted[name]) for name in self._listeners}

    def has_listeners(self, event_name: str | None = None) -> bool:
        """Check whether any listener is registered.

        Args:
            event_name: Restrict the check to one event.

        Returns:
            True if at least one listener is registered.
        """
        with self._lock:
            if event_name is not None:
                return bool(self._listeners.get(event_name))
            return any(self._listeners.values())

    def clear_listeners(self) -> None:
        """Unregister every listener of every event."""
        with self._lock:
            self._listeners.clear()
            self._sorted.clear()
        logger.debug("Cleared all listeners")

    def _sort_listeners(self, event_name: str) -> None:
        by_priority = self._listeners[event_name]
        self._sorted[event_name] = [
            listener
            for priority in sorted(by_priority, reverse=True)
            for listener in by_priority[priority]
        ]
