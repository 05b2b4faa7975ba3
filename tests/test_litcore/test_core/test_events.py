import gc
import logging

import pytest
from enum import Enum, auto
from litcore.core.events import EventBus, Event

class MockEvent(Enum):
    TEST_EVENT = auto()
    OTHER_EVENT = auto()

def test_event_bus_subscribe_publish(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT, data="test")

    assert len(received) == 1
    assert received[0].type == MockEvent.TEST_EVENT
    assert received[0]["data"] == "test"
    assert received[0].get("missing", 7) == 7

def test_event_bus_unsubscribe(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.unsubscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert len(received) == 0

def test_event_priority(event_bus):
    order = []

    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("low"), priority=1, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("high"), priority=10, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal"), priority=5, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal-2"), priority=5, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["high", "normal", "normal-2", "low"]

def test_event_consumption(event_bus):
    received = []

    def consumer(event):
        received.append("consumer")
        event.consume()

    def later_handler(event):
        received.append("later")

    event_bus.subscribe(MockEvent.TEST_EVENT, consumer, priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, later_handler, priority=5)

    event = event_bus.publish(MockEvent.TEST_EVENT)

    assert received == ["consumer"]
    assert event.consumed

def test_one_shot_handler(event_bus):
    calls = []
    def handler(event):
        calls.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler, one_shot=True)
    event_bus.publish(MockEvent.TEST_EVENT)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert len(calls) == 1
    assert event_bus.handler_count(MockEvent.TEST_EVENT) == 0

def test_weak_handler_dropped_with_owner(event_bus):
    calls = []

    class Listener:
        def on_event(self, event):
            calls.append(event)

    listener = Listener()
    event_bus.subscribe(MockEvent.TEST_EVENT, listener.on_event)
    event_bus.publish(MockEvent.TEST_EVENT)

    del listener
    gc.collect()
    event_bus.publish(MockEvent.TEST_EVENT)

    assert len(calls) == 1
    assert event_bus.handler_count(MockEvent.TEST_EVENT) == 0

def test_publish_during_dispatch_is_queued(event_bus):
    order = []

    def first(event):
        order.append("first-start")
        event_bus.publish(MockEvent.OTHER_EVENT)
        order.append("first-end")

    def second(event):
        order.append("second")

    event_bus.subscribe(MockEvent.TEST_EVENT, first)
    event_bus.subscribe(MockEvent.OTHER_EVENT, second)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["first-start", "first-end", "second"]

def test_handler_exception_is_logged(event_bus, caplog):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    def healthy(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, broken, priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, healthy)

    with caplog.at_level(logging.ERROR, logger="litcore.core.events"):
        event_bus.publish(MockEvent.TEST_EVENT)

    assert len(received) == 1
    assert "Handler failed" in caplog.text

def test_clear(event_bus):
    def handler(event):
        pass

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.subscribe(MockEvent.OTHER_EVENT, handler)

    event_bus.clear(MockEvent.TEST_EVENT)
    assert event_bus.handler_count(MockEvent.TEST_EVENT) == 0
    assert event_bus.handler_count(MockEvent.OTHER_EVENT) == 1

    event_bus.clear()
    assert event_bus.handler_count(MockEvent.OTHER_EVENT) == 0

def test_publish_event_directly(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event = Event(type=MockEvent.TEST_EVENT, data={"level": 4})
    event_bus.publish_event(event)

    assert received == [event]
