"""Event payloads dispatched by the cache invalidator."""

from dataclasses import dataclass


class Events:
    """Names of the events dispatched during flush."""

    PROXY_RESPONSE_ERROR = "purgekit.proxy_response_error"
    PROXY_UNREACHABLE_ERROR = "purgekit.proxy_unreachable_error"


@dataclass
class Event:
    """Notification carrying the error that triggered it.

    Attributes:
        exception: The error encountered while flushing.
        propagation_stopped: Set by a listener to keep later listeners
            from receiving the event.
    """

    exception: BaseException | None = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        """Prevent remaining listeners from being called."""
        self.propagation_stopped = True
