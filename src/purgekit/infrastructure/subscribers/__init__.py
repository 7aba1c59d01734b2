"""Event subscribers."""

from purgekit.infrastructure.subscribers.log_subscriber import LogSubscriber

__all__ = ["LogSubscriber"]
