"""Core components: sinks, fan-out dispatch and event notification."""

from proclog.core.composite import CompositeSink
from proclog.core.errors import (
    InvalidArgumentsError,
    NoSuchStreamError,
    ProcLogError,
    UnsupportedOperationError,
)
from proclog.core.events import (
    LogEventEmitter,
    NullLocker,
    NullLogEventEmitter,
    ProcessLogChannel,
    ProcessLogEvent,
    ProcessLogEventEmitter,
)
from proclog.core.factory import (
    create_logger,
    create_logger_from_config,
    create_sink,
    split_destinations,
)
from proclog.core.sinks import FileSink, NullSink, Sink, StdSink, SysLogSink, TailResult

__all__ = [
    "CompositeSink",
    "FileSink",
    "InvalidArgumentsError",
    "LogEventEmitter",
    "NoSuchStreamError",
    "NullLocker",
    "NullLogEventEmitter",
    "NullSink",
    "ProcLogError",
    "ProcessLogChannel",
    "ProcessLogEvent",
    "ProcessLogEventEmitter",
    "Sink",
    "StdSink",
    "SysLogSink",
    "TailResult",
    "UnsupportedOperationError",
    "create_logger",
    "create_logger_from_config",
    "create_sink",
    "split_destinations",
]
