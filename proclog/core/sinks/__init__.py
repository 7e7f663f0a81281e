"""
Sink implementations.

The set of sink kinds is closed:
- FileSink: durable, size-rotated file with read/tail/clear support
- StdSink: passthrough to stdout/stderr
- SysLogSink: forwards to syslog
- NullSink: discards output
"""

from proclog.core.sinks.base import NullSink, Sink, TailResult
from proclog.core.sinks.file import FileSink
from proclog.core.sinks.std import StdSink
from proclog.core.sinks.syslog import SysLogSink

__all__ = [
    "FileSink",
    "NullSink",
    "Sink",
    "StdSink",
    "SysLogSink",
    "TailResult",
]
