"""
Construction of sinks from destination specifications.

A destination specification is a comma-separated list. Each entry is one of
the sentinels ``/dev/stdout``, ``/dev/stderr``, ``/dev/null`` and ``syslog``,
or a file path. The first entry becomes the primary sink and receives the
caller's lock and emitter; later entries get no-op ones.
"""

from typing import Any, Dict, List, Optional

from proclog.core.composite import CompositeSink
from proclog.core.events import (
    LogEventEmitter,
    NullLocker,
    NullLogEventEmitter,
    ProcessLogChannel,
)
from proclog.core.sinks.base import NullSink, Sink
from proclog.core.sinks.file import FileSink
from proclog.core.sinks.std import StdSink
from proclog.core.sinks.syslog import SysLogSink
from proclog.utils.config import Config
from proclog.utils.logging import bind_program, get_logger, unbind_program

logger = get_logger(__name__)

STDOUT = "/dev/stdout"
STDERR = "/dev/stderr"
DEVNULL = "/dev/null"
SYSLOG = "syslog"

DEFAULT_MAX_BYTES = 50 * 1024 * 1024
DEFAULT_BACKUPS = 10


def split_destinations(destination: str) -> List[str]:
    """
    Split a destination specification into trimmed entries.

    Args:
        destination: Comma-separated destinations

    Returns:
        One entry per comma-separated token
    """
    return [entry.strip() for entry in destination.split(",")]


def create_sink(
    program_name: str,
    destination: str,
    lock: Any,
    max_bytes: int,
    backups: int,
    props: Optional[Dict[str, str]],
    emitter: LogEventEmitter,
) -> Sink:
    """
    Build the sink for a single destination.

    Args:
        program_name: Name of the supervised program
        destination: One trimmed destination entry
        lock: Lock handed to file sinks
        max_bytes: Rotation threshold for file sinks
        backups: Backup count for file sinks
        props: Program properties (syslog_* keys are used)
        emitter: Event target for the sink

    Returns:
        Sink for the destination
    """
    if destination == STDOUT:
        return StdSink.stdout(emitter)
    if destination == STDERR:
        return StdSink.stderr(emitter)
    if destination == DEVNULL:
        return NullSink(emitter)
    if destination == SYSLOG:
        return SysLogSink(program_name, props, emitter)
    if destination:
        return FileSink(destination, max_bytes, backups, emitter=emitter, lock=lock)
    return NullSink(emitter)


def create_logger(
    program_name: str,
    destination: str,
    lock: Any,
    max_bytes: int,
    backups: int,
    props: Optional[Dict[str, str]] = None,
    emitter: Optional[LogEventEmitter] = None,
) -> CompositeSink:
    """
    Build the dispatcher for a destination specification.

    Args:
        program_name: Name of the supervised program
        destination: Comma-separated destination specification
        lock: Lock for the primary sink, shared with the caller
        max_bytes: Rotation threshold for file sinks
        backups: Backup count for file sinks
        props: Program properties (syslog_* keys are used)
        emitter: Event target for the primary sink

    Returns:
        CompositeSink whose first sink is the primary destination
    """
    emitter = emitter or NullLogEventEmitter()
    sinks: List[Sink] = []

    for i, entry in enumerate(split_destinations(destination)):
        if i == 0:
            sink = create_sink(program_name, entry, lock, max_bytes, backups, props, emitter)
        else:
            sink = create_sink(
                program_name,
                entry,
                NullLocker(),
                max_bytes,
                backups,
                props,
                NullLogEventEmitter(),
            )
        sinks.append(sink)

    logger.debug(
        "Created logger",
        program=program_name,
        destinations=[repr(s) for s in sinks],
    )

    return CompositeSink(sinks)


def create_logger_from_config(
    config: Config,
    program_name: str,
    channel: ProcessLogChannel,
    lock: Any,
    emitter: Optional[LogEventEmitter] = None,
) -> CompositeSink:
    """
    Build the dispatcher for one output channel of a configured program.

    Reads ``programs.<name>.<channel>_logfile``, ``<channel>_logfile_maxbytes``
    and ``<channel>_logfile_backups``, falling back to the ``logfile``
    section. A program without a log file discards its output.

    Args:
        config: Loaded configuration
        program_name: Program section name
        channel: stdout or stderr
        lock: Lock for the primary sink
        emitter: Event target for the primary sink

    Returns:
        CompositeSink for the channel
    """
    channel = ProcessLogChannel(channel)
    section = f"programs.{program_name}"
    prefix = f"{section}.{channel.value}_logfile"

    default_max_bytes = config.get_bytes("logfile.maxbytes", DEFAULT_MAX_BYTES)
    default_backups = int(config.get("logfile.backups", DEFAULT_BACKUPS))

    destination = config.get(prefix) or DEVNULL
    max_bytes = config.get_bytes(f"{prefix}_maxbytes", default_max_bytes)
    backups = int(config.get(f"{prefix}_backups", default_backups))

    program = config.get(section) or {}
    props = {
        key: str(value)
        for key, value in program.items()
        if key.startswith("syslog_")
    }

    bind_program(program_name, channel.value)
    try:
        return create_logger(
            program_name,
            str(destination),
            lock,
            max_bytes,
            backups,
            props,
            emitter,
        )
    finally:
        unbind_program()
