"""Subscriber that logs proxy errors."""

import logging

from purgekit.core.entities.event import Event, Events


class LogSubscriber:
    """Log flush errors dispatched by the cache invalidator.

    Unreachable proxies are logged as critical since no invalidation
    reached them; rejected requests are logged as errors.

    Example:
        invalidator.get_event_dispatcher().add_subscriber(LogSubscriber())
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def get_subscribed_events(self) -> dict[str, str | tuple[str, int]]:
        return {
            Events.PROXY_RESPONSE_ERROR: "on_proxy_response_error",
            Events.PROXY_UNREACHABLE_ERROR: "on_proxy_unreachable_error",
        }

    def on_proxy_response_error(self, event: Event, *args: object) -> None:
        self._log(logging.ERROR, event)

    def on_proxy_unreachable_error(self, event: Event, *args: object) -> None:
        self._log(logging.CRITICAL, event)

    def _log(self, level: int, event: Event) -> None:
        exception = event.exception
        if exception is None:
            return
        self._logger.log(
            level,
            "Caching proxy error: %s",
            exception,
            exc_info=(type(exception), exception, exception.__traceback__),
        )
