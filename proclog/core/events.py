"""
Lock and event-notification capabilities injected into sinks.

The primary destination of a logical output stream gets the caller's real
lock and emitter. Secondary destinations get the no-op variants defined here
so they neither contend for the primary's lock nor duplicate notifications.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from proclog.utils.logging import get_logger

logger = get_logger(__name__)


class ProcessLogChannel(str, Enum):
    """Output channel of a supervised process."""
    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True)
class ProcessLogEvent:
    """
    Notification delivered to log-forwarding listeners.

    Attributes:
        process_name: Name of the supervised program
        channel: Output channel the data was captured from
        pid: Process id at the time of the write (None before start)
        data: Exact bytes written
    """
    process_name: str
    channel: ProcessLogChannel
    pid: Optional[int]
    data: bytes

    @property
    def event_type(self) -> str:
        """Supervisor event name, e.g. PROCESS_LOG_STDOUT."""
        return f"PROCESS_LOG_{self.channel.value.upper()}"


class LogEventEmitter(ABC):
    """Receives the content of every write a sink reports."""

    @abstractmethod
    def emit_log_event(self, data: bytes) -> None:
        """Notify about written data."""
        pass


class NullLogEventEmitter(LogEventEmitter):
    """Emitter that drops every notification."""

    def emit_log_event(self, data: bytes) -> None:
        pass


LogEventListener = Callable[[ProcessLogEvent], None]


class ProcessLogEventEmitter(LogEventEmitter):
    """
    Emitter that forwards writes to subscribed listeners as ProcessLogEvents.

    One instance exists per process output channel. Listeners run
    synchronously on the writing thread; a failing listener is logged and
    never affects the write or the other listeners.
    """

    def __init__(self, process_name: str, channel: ProcessLogChannel):
        """
        Initialize emitter.

        Args:
            process_name: Name of the supervised program
            channel: Channel this emitter reports for
        """
        self.process_name = process_name
        self.channel = ProcessLogChannel(channel)
        self.pid: Optional[int] = None
        self._listeners: List[LogEventListener] = []
        self._lock = threading.Lock()

    def set_pid(self, pid: int) -> None:
        """Record the pid attached to subsequent events."""
        self.pid = pid

    def subscribe(self, listener: LogEventListener) -> None:
        """Register a listener."""
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: LogEventListener) -> None:
        """Remove a listener by equality; unknown listeners are ignored."""
        with self._lock:
            for i, registered in enumerate(self._listeners):
                if registered == listener:
                    del self._listeners[i]
                    break

    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def emit_log_event(self, data: bytes) -> None:
        with self._lock:
            listeners = list(self._listeners)

        if not listeners:
            return

        event = ProcessLogEvent(
            process_name=self.process_name,
            channel=self.channel,
            pid=self.pid,
            data=bytes(data),
        )

        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(
                    "Log event listener failed",
                    process=self.process_name,
                    channel=self.channel.value,
                    error=str(e),
                )


class NullLocker:
    """
    Lock that never blocks.

    Same surface as threading.Lock (acquire/release/context manager), used
    for secondary destinations that must not serialize with the primary.
    """

    def acquire(self, blocking: bool = True, timeout: float = -1) -> bool:
        return True

    def release(self) -> None:
        pass

    def locked(self) -> bool:
        return False

    def __enter__(self) -> "NullLocker":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass
