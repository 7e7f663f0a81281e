"""
Sink interface and the discard sink.

A sink is one destination for a process's output. The set of sink kinds is
fixed: FileSink, StdSink, SysLogSink and NullSink. Only FileSink keeps
history, so only it serves reads, tails and clears; every other kind fails
those calls the way NullSink does.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from proclog.core.errors import NoSuchStreamError, UnsupportedOperationError
from proclog.core.events import LogEventEmitter, NullLogEventEmitter


@dataclass(frozen=True)
class TailResult:
    """
    Result of a tailing read.

    Attributes:
        data: Bytes read (empty when nothing new is available)
        offset: Offset to pass to the next read_tail call
        eof: True when the reader has drained all currently available bytes
    """
    data: bytes
    offset: int
    eof: bool


class Sink(ABC):
    """Destination for process output."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write data to the destination.

        Returns:
            Number of bytes written

        Raises:
            OSError: If the underlying write fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release resources held by the sink."""
        pass

    @abstractmethod
    def set_pid(self, pid: int) -> None:
        """Inform the sink of the process id producing the output."""
        pass

    @abstractmethod
    def read_range(self, offset: int, length: int) -> bytes:
        """Read persisted output by offset."""
        pass

    @abstractmethod
    def read_tail(self, offset: int, length: int) -> TailResult:
        """Read output appended since ``offset``."""
        pass

    @abstractmethod
    def clear_current(self) -> None:
        """Truncate the current output."""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Remove all persisted output including backups."""
        pass


class NullSink(Sink):
    """
    Sink that discards output.

    Writes always succeed and are reported to the emitter. Also the base of
    the other history-less sinks, which inherit its failing reads and clears.
    """

    def __init__(self, emitter: Optional[LogEventEmitter] = None):
        self.emitter = emitter or NullLogEventEmitter()

    def write(self, data: bytes) -> int:
        self.emitter.emit_log_event(data)
        return len(data)

    def close(self) -> None:
        pass

    def set_pid(self, pid: int) -> None:
        pass

    def read_range(self, offset: int, length: int) -> bytes:
        raise NoSuchStreamError("NO_FILE")

    def read_tail(self, offset: int, length: int) -> TailResult:
        raise NoSuchStreamError("NO_FILE")

    def clear_current(self) -> None:
        raise UnsupportedOperationError("No log")

    def clear_all(self) -> None:
        raise NoSuchStreamError("NO_FILE")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
