"""Tests for EventDispatcher."""

import logging
from typing import get_type_hints

import pytest

from purgekit import Event, EventDispatcher, IEventDispatcher
from purgekit.core.interfaces.event_dispatcher import Listener


class RecordingSubscriber:
    """Subscriber recording which method received an event."""

    def __init__(self) -> None:
        self.received: list[str] = []

    def get_subscribed_events(self) -> dict:
        return {
            "first": "on_first",
            "second": ("on_second", 10),
        }

    def on_first(self, event, name, dispatcher) -> None:
        self.received.append(f"first:{name}")

    def on_second(self, event, name, dispatcher) -> None:
        self.received.append(f"second:{name}")


class TestEventDispatcher:
    """Tests for EventDispatcher."""

    @pytest.fixture
    def dispatcher(self) -> EventDispatcher:
        """Create an empty dispatcher."""
        return EventDispatcher()

    def test_implements_interface(self, dispatcher: EventDispatcher) -> None:
        """Test the dispatcher satisfies the dispatcher protocol."""
        assert isinstance(dispatcher, IEventDispatcher)

    def test_dispatch_without_listeners(self, dispatcher: EventDispatcher) -> None:
        """Test dispatching to nobody returns the event."""
        event = Event()

        assert dispatcher.dispatch(event, "nothing") is event

    def test_listener_arguments(self, dispatcher: EventDispatcher) -> None:
        """Test listeners receive event, name and dispatcher."""
        calls = []
        dispatcher.add_listener("foo", lambda *args: calls.append(args))
        event = Event()

        dispatcher.dispatch(event, "foo")

        assert calls == [(event, "foo", dispatcher)]

    def test_only_matching_listeners_called(self, dispatcher: EventDispatcher) -> None:
        """Test listeners of other events are not called."""
        calls = []
        dispatcher.add_listener("foo", lambda *args: calls.append("foo"))
        dispatcher.add_listener("bar", lambda *args: calls.append("bar"))

        dispatcher.dispatch(Event(), "foo")

        assert calls == ["foo"]

    def test_priority_order(self, dispatcher: EventDispatcher) -> None:
        """Test higher priorities run first, ties keep registration order."""
        calls = []
        dispatcher.add_listener("foo", lambda *args: calls.append("low"), -5)
        dispatcher.add_listener("foo", lambda *args: calls.append("a"))
        dispatcher.add_listener("foo", lambda *args: calls.append("high"), 10)
        dispatcher.add_listener("foo", lambda *args: calls.append("b"))

        dispatcher.dispatch(Event(), "foo")

        assert calls == ["high", "a", "b", "low"]

    def test_stop_propagation(self, dispatcher: EventDispatcher) -> None:
        """Test later listeners are skipped once propagation stops."""
        calls = []

        def stopper(event, name, d):
            calls.append("stopper")
            event.stop_propagation()

        dispatcher.add_listener("foo", stopper, 5)
        dispatcher.add_listener("foo", lambda *args: calls.append("skipped"))

        event = dispatcher.dispatch(Event(), "foo")

        assert calls == ["stopper"]
        assert event.propagation_stopped is True

    def test_remove_listener(self, dispatcher: EventDispatcher) -> None:
        """Test removed listeners are no longer called."""
        calls = []

        def listener(*args):
            calls.append("called")

        dispatcher.add_listener("foo", listener)
        dispatcher.remove_listener("foo", listener)
        dispatcher.dispatch(Event(), "foo")

        assert calls == []
        assert dispatcher.has_listeners("foo") is False

    def test_remove_unknown_listener(self, dispatcher: EventDispatcher) -> None:
        """Test removing an unknown listener is ignored."""
        dispatcher.remove_listener("foo", lambda *args: None)

        assert dispatcher.has_listeners() is False

    def test_get_listeners(self, dispatcher: EventDispatcher) -> None:
        """Test listeners are listed sorted by priority."""

        def a(*args):
            pass

        def b(*args):
            pass

        dispatcher.add_listener("foo", a)
        dispatcher.add_listener("foo", b, 1)
        dispatcher.add_listener("bar", a)

        assert dispatcher.get_listeners("foo") == [b, a]
        assert dispatcher.get_listeners("missing") == []
        assert dispatcher.get_listeners() == {"foo": [b, a], "bar": [a]}

    def test_listener_added_after_dispatch(self, dispatcher: EventDispatcher) -> None:
        """Test the sorted cache is refreshed when listeners change."""
        calls = []
        dispatcher.add_listener("foo", lambda *args: calls.append("first"))
        dispatcher.dispatch(Event(), "foo")

        dispatcher.add_listener("foo", lambda *args: calls.append("second"), 1)
        dispatcher.dispatch(Event(), "foo")

        assert calls == ["first", "second", "first"]

    def test_has_listeners(self, dispatcher: EventDispatcher) -> None:
        """Test listener presence checks."""
        assert dispatcher.has_listeners() is False

        dispatcher.add_listener("foo", lambda *args: None)

        assert dispatcher.has_listeners() is True
        assert dispatcher.has_listeners("foo") is True
        assert dispatcher.has_listeners("bar") is False

    def test_add_subscriber(self, dispatcher: EventDispatcher) -> None:
        """Test subscribers register methods with their priorities."""
        subscriber = RecordingSubscriber()
        dispatcher.add_subscriber(subscriber)

        dispatcher.dispatch(Event(), "first")
        dispatcher.dispatch(Event(), "second")

        assert subscriber.received == ["first:first", "second:second"]
        assert dispatcher.get_listeners("second") == [subscriber.on_second]

    def test_failing_listener_does_not_stop_dispatch(
        self, dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a raising listener is logged and later listeners still run."""
        calls = []

        def broken(event, name, d):
            raise RuntimeError("listener broke")

        dispatcher.add_listener("foo", broken, 5)
        dispatcher.add_listener("foo", lambda *args: calls.append("after"))

        with caplog.at_level(logging.ERROR):
            dispatcher.dispatch(Event(), "foo")

        assert calls == ["after"]
        (record,) = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert "broken" in record.getMessage()
        assert record.exc_info is not None

    def test_registration_is_logged(
        self, dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test registering a listener logs the new listener count."""

        def listener(*args):
            pass

        with caplog.at_level(logging.DEBUG):
            dispatcher.add_listener("foo", listener)
            dispatcher.add_listener("foo", listener, 3)

        messages = [record.getMessage() for record in caplog.records]
        assert "Registered listener listener for foo (2 total)" in messages

    def test_clear_listeners(self, dispatcher: EventDispatcher) -> None:
        """Test clearing removes listeners of every event."""
        dispatcher.add_listener("foo", lambda *args: None)
        dispatcher.add_listener("bar", lambda *args: None)
        dispatcher.get_listeners("foo")

        dispatcher.clear_listeners()

        assert dispatcher.has_listeners() is False
        assert dispatcher.get_listeners("foo") == []
        assert dispatcher.get_listeners() == {}

    def test_get_listeners_return_type(self) -> None:
        """Test the listener accessor declares its list and mapping shapes."""
        hints = get_type_hints(EventDispatcher.get_listeners)

        assert hints["return"] == list[Listener] | dict[str, list[Listener]]
