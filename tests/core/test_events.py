"""Tests for the lock and event-notification capabilities."""

import pytest

from proclog.core.events import (
    NullLocker,
    NullLogEventEmitter,
    ProcessLogChannel,
    ProcessLogEvent,
    ProcessLogEventEmitter,
)


class TestProcessLogEventEmitter:
    """Test ProcessLogEventEmitter."""

    def test_delivers_event_to_listeners(self):
        """Test event contents."""
        received = []
        emitter = ProcessLogEventEmitter("web", ProcessLogChannel.STDERR)
        emitter.subscribe(received.append)
        emitter.set_pid(4242)

        emitter.emit_log_event(b"oops\n")

        assert received == [
            ProcessLogEvent(
                process_name="web",
                channel=ProcessLogChannel.STDERR,
                pid=4242,
                data=b"oops\n",
            )
        ]
        assert received[0].event_type == "PROCESS_LOG_STDERR"

    def test_channel_from_string(self):
        """Test channel coercion."""
        emitter = ProcessLogEventEmitter("web", "stdout")

        assert emitter.channel is ProcessLogChannel.STDOUT

    def test_invalid_channel(self):
        """Test unknown channel names."""
        with pytest.raises(ValueError):
            ProcessLogEventEmitter("web", "stdin")

    def test_unsubscribe_bound_method(self):
        """Test removing a bound method looked up again at unsubscribe time."""

        class Collector:
            def __init__(self):
                self.events = []

            def on_event(self, event):
                self.events.append(event)

        collector = Collector()
        other = Collector()
        emitter = ProcessLogEventEmitter("web", ProcessLogChannel.STDOUT)
        emitter.subscribe(collector.on_event)
        emitter.subscribe(other.on_event)

        emitter.unsubscribe(collector.on_event)
        emitter.unsubscribe(collector.on_event)

        assert emitter.listener_count() == 1

        emitter.emit_log_event(b"after unsubscribe")

        assert collector.events == []
        assert [e.data for e in other.events] == [b"after unsubscribe"]

    def test_unsubscribe_registered_listener(self):
        """Test removing the exact registered callable."""
        received = []

        def listener(event):
            received.append(event)

        emitter = ProcessLogEventEmitter("web", ProcessLogChannel.STDOUT)
        emitter.subscribe(listener)
        emitter.unsubscribe(listener)

        emitter.emit_log_event(b"x")

        assert received == []
        assert emitter.listener_count() == 0

    def test_failing_listener_does_not_stop_others(self):
        """Test listener isolation."""
        received = []

        def broken(event):
            raise RuntimeError("listener down")

        emitter = ProcessLogEventEmitter("web", ProcessLogChannel.STDOUT)
        emitter.subscribe(broken)
        emitter.subscribe(received.append)

        emitter.emit_log_event(b"still delivered")

        assert [e.data for e in received] == [b"still delivered"]


class TestNullObjects:
    """Test no-op lock and emitter."""

    def test_null_emitter(self):
        """Test that the null emitter accepts data."""
        NullLogEventEmitter().emit_log_event(b"ignored")

    def test_null_locker_never_blocks(self):
        """Test re-entrant use of the no-op lock."""
        lock = NullLocker()

        with lock:
            with lock:
                assert lock.acquire()
                lock.release()

        assert not lock.locked()
