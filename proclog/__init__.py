"""
proclog - output capture for supervised processes.

This package persists the stdout/stderr of supervised processes with:
- Size-based rotation with numbered backups
- Byte-offset reads and tail-follow reads of the active log
- Fan-out to files, standard streams, syslog or nowhere
- Event notification for log-forwarding listeners
"""

__version__ = "0.1.0"

from proclog.core import (
    CompositeSink,
    FileSink,
    InvalidArgumentsError,
    NoSuchStreamError,
    NullLocker,
    NullLogEventEmitter,
    NullSink,
    ProcessLogChannel,
    ProcessLogEventEmitter,
    StdSink,
    SysLogSink,
    TailResult,
    UnsupportedOperationError,
    create_logger,
    create_logger_from_config,
)

__all__ = [
    "CompositeSink",
    "FileSink",
    "InvalidArgumentsError",
    "NoSuchStreamError",
    "NullLocker",
    "NullLogEventEmitter",
    "NullSink",
    "ProcessLogChannel",
    "ProcessLogEventEmitter",
    "StdSink",
    "SysLogSink",
    "TailResult",
    "UnsupportedOperationError",
    "create_logger",
    "create_logger_from_config",
]
