"""Pytest configuration for purgekit tests."""

from typing import Any

import pytest


class RecordingClient:
    """Proxy client with no capabilities that records calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.flush_result = 0
        self.flush_error: BaseException | None = None

    def flush(self) -> int:
        self.calls.append(("flush",))
        if self.flush_error is not None:
            raise self.flush_error
        return self.flush_result


class FullClient(RecordingClient):
    """Recording proxy client declaring every capability."""

    def purge(self, url, headers=None):
        self.calls.append(("purge", url, headers))
        return self

    def refresh(self, url, headers=None):
        self.calls.append(("refresh", url, headers))
        return self

    def ban(self, headers):
        self.calls.append(("ban", headers))
        return self

    def ban_path(self, path, content_type=None, hosts=None):
        self.calls.append(("ban_path", path, content_type, hosts))
        return self

    def invalidate_tags(self, tags):
        self.calls.append(("invalidate_tags", tags))
        return self

    def clear(self):
        self.calls.append(("clear",))
        return self


class PurgeOnlyClient(RecordingClient):
    """Recording proxy client that can only purge."""

    def purge(self, url, headers=None):
        self.calls.append(("purge", url, headers))
        return self


@pytest.fixture
def bare_client() -> RecordingClient:
    """Proxy client without any capability."""
    return RecordingClient()


@pytest.fixture
def full_client() -> FullClient:
    """Proxy client with every capability."""
    return FullClient()


@pytest.fixture
def purge_only_client() -> PurgeOnlyClient:
    """Proxy client that only supports purging."""
    return PurgeOnlyClient()
