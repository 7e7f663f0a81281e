"""Sink forwarding output to the supervisor's own stdout or stderr."""

import sys
from typing import BinaryIO, Optional

from proclog.core.events import LogEventEmitter
from proclog.core.sinks.base import NullSink


def _binary(stream) -> BinaryIO:
    return getattr(stream, "buffer", stream)


class StdSink(NullSink):
    """
    Passthrough to a standard stream.

    Unlike the file sink, the emitter is notified only when forwarding fails,
    so listeners still receive output the stream could not take.
    """

    def __init__(self, stream: BinaryIO, emitter: Optional[LogEventEmitter] = None):
        """
        Args:
            stream: Binary writable the output is forwarded to
            emitter: Notified with data whose forwarding failed
        """
        super().__init__(emitter)
        self.stream = stream

    @classmethod
    def stdout(cls, emitter: Optional[LogEventEmitter] = None) -> "StdSink":
        return cls(_binary(sys.stdout), emitter)

    @classmethod
    def stderr(cls, emitter: Optional[LogEventEmitter] = None) -> "StdSink":
        return cls(_binary(sys.stderr), emitter)

    def write(self, data: bytes) -> int:
        try:
            n = self.stream.write(data)
            self.stream.flush()
        except (OSError, ValueError):
            self.emitter.emit_log_event(data)
            raise
        return len(data) if n is None else n

    def __repr__(self) -> str:
        return f"StdSink(stream={getattr(self.stream, 'name', self.stream)!r})"
