"""
Fan-out dispatcher over several sinks.

The first sink is the primary: its result is what callers see, and it alone
serves reads, tails and clears. The remaining sinks are best-effort mirrors
whose failures are logged and dropped.
"""

import threading
from typing import List, Optional, Sequence

from proclog.core.errors import NoSuchStreamError
from proclog.core.sinks.base import Sink, TailResult
from proclog.utils.logging import get_logger

logger = get_logger(__name__)


class CompositeSink(Sink):
    """
    Dispatches output to an ordered list of sinks.

    The internal lock covers writing to all sinks, closing them and changing
    the list. Reads and clears go straight to the primary, which serializes
    them with its own lock.
    """

    def __init__(self, sinks: Optional[Sequence[Sink]] = None):
        """
        Initialize dispatcher.

        Args:
            sinks: Sinks in priority order; index 0 is the primary
        """
        self._sinks: List[Sink] = list(sinks or [])
        self._lock = threading.Lock()

    @property
    def sinks(self) -> List[Sink]:
        """Snapshot of the sinks in order."""
        with self._lock:
            return list(self._sinks)

    @property
    def primary(self) -> Sink:
        """
        The sink serving reads and clears.

        Raises:
            NoSuchStreamError: If no sinks are configured
        """
        sinks = self._sinks
        if not sinks:
            raise NoSuchStreamError("NO_FILE")
        return sinks[0]

    def add_sink(self, sink: Sink) -> None:
        """Append a sink to the end of the list."""
        with self._lock:
            self._sinks.append(sink)

    def remove_sink(self, sink: Sink) -> None:
        """Remove a sink by identity. Removing a non-member is a no-op."""
        with self._lock:
            for i, member in enumerate(self._sinks):
                if member is sink:
                    del self._sinks[i]
                    break

    def write(self, data: bytes) -> int:
        """
        Write data to every sink in order.

        Returns:
            Bytes written by the primary sink (0 with no sinks)

        Raises:
            Exception: Whatever the primary sink raised, after the remaining
                sinks have been written
        """
        n = 0
        primary_error: Optional[BaseException] = None

        with self._lock:
            for i, sink in enumerate(self._sinks):
                try:
                    result = sink.write(data)
                except Exception as e:
                    if i == 0:
                        primary_error = e
                    else:
                        logger.warning(
                            "Secondary sink write failed",
                            sink=repr(sink),
                            error=str(e),
                        )
                    continue
                if i == 0:
                    n = result

        if primary_error is not None:
            raise primary_error
        return n

    def close(self) -> None:
        """
        Close every sink.

        Raises:
            Exception: Whatever the primary sink raised on close
        """
        primary_error: Optional[BaseException] = None

        with self._lock:
            for i, sink in enumerate(self._sinks):
                try:
                    sink.close()
                except Exception as e:
                    if i == 0:
                        primary_error = e
                    else:
                        logger.warning(
                            "Secondary sink close failed",
                            sink=repr(sink),
                            error=str(e),
                        )

        if primary_error is not None:
            raise primary_error

    def set_pid(self, pid: int) -> None:
        with self._lock:
            sinks = list(self._sinks)
        for sink in sinks:
            sink.set_pid(pid)

    def read_range(self, offset: int, length: int) -> bytes:
        return self.primary.read_range(offset, length)

    def read_tail(self, offset: int, length: int) -> TailResult:
        return self.primary.read_tail(offset, length)

    def clear_current(self) -> None:
        self.primary.clear_current()

    def clear_all(self) -> None:
        self.primary.clear_all()

    def __len__(self) -> int:
        return len(self._sinks)

    def __repr__(self) -> str:
        return f"CompositeSink(sinks={self._sinks!r})"
