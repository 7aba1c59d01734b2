"""Tests for domain entities."""

from datetime import timedelta

import pytest

from purgekit import (
    CachedResponse,
    Event,
    Events,
    InMemoryProxyConfig,
    InvalidArgumentError,
    Operation,
)


class TestOperation:
    """Tests for the Operation enum."""

    def test_values(self) -> None:
        """Test the operation values."""
        assert [op.value for op in Operation] == [
            "path",
            "refresh",
            "invalidate",
            "tags",
            "clear",
        ]

    def test_lookup_by_value(self) -> None:
        """Test operations can be looked up by value."""
        assert Operation("tags") is Operation.TAGS


class TestEvent:
    """Tests for Event."""

    def test_defaults(self) -> None:
        """Test a new event carries no error and propagates."""
        event = Event()

        assert event.exception is None
        assert event.propagation_stopped is False

    def test_stop_propagation(self) -> None:
        """Test propagation can be stopped."""
        event = Event(exception=ValueError("x"))
        event.stop_propagation()

        assert event.propagation_stopped is True

    def test_event_names_differ(self) -> None:
        """Test the two error events have distinct names."""
        assert Events.PROXY_RESPONSE_ERROR != Events.PROXY_UNREACHABLE_ERROR


class TestInMemoryProxyConfig:
    """Tests for InMemoryProxyConfig."""

    def test_defaults(self) -> None:
        """Test default values are filled in."""
        config = InMemoryProxyConfig()

        assert config.maxsize == 1000
        assert config.default_ttl == timedelta(minutes=5)
        assert config.tags_header == "X-Cache-Tags"
        assert config.tags_separator == ","

    def test_explicit_ttl(self) -> None:
        """Test an explicit response TTL is kept."""
        config = InMemoryProxyConfig(default_ttl=timedelta(seconds=30))

        assert config.default_ttl == timedelta(seconds=30)

    def test_tag_index_has_no_own_limits(self) -> None:
        """Test the tag index cannot be bounded apart from the store."""
        with pytest.raises(TypeError):
            InMemoryProxyConfig(max_tags=1)  # type: ignore[call-arg]
        with pytest.raises(TypeError):
            InMemoryProxyConfig(tag_ttl=timedelta(seconds=1))  # type: ignore[call-arg]

    @pytest.mark.parametrize(
        "kwargs",
        [{"maxsize": 0}, {"maxsize": -1}, {"tags_separator": ""}],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        """Test invalid sizes and separators are rejected."""
        with pytest.raises(InvalidArgumentError):
            InMemoryProxyConfig(**kwargs)


class TestCachedResponse:
    """Tests for CachedResponse."""

    def test_header_lookup_is_case_insensitive(self) -> None:
        """Test headers are found regardless of case."""
        response = CachedResponse(
            url="/foo",
            content=b"",
            headers={"Content-Type": "text/html"},
        )

        assert response.header("content-type") == "text/html"
        assert response.header("CONTENT-TYPE") == "text/html"
        assert response.header("X-Missing") is None

    def test_is_immutable(self) -> None:
        """Test responses cannot be modified."""
        response = CachedResponse(url="/foo", content=b"body")

        with pytest.raises(AttributeError):
            response.url = "/bar"  # type: ignore[misc]
