"""
Sink forwarding output to syslog.

Delivery is delegated to the standard library's SysLogHandler; this module
only maps the program's syslog properties onto it and splits output into
one message per line.
"""

import logging
import logging.handlers
import os
from typing import Dict, Optional, Tuple, Union

from proclog.core.events import LogEventEmitter
from proclog.core.sinks.base import NullSink
from proclog.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SOCKET = "/dev/log"
DEFAULT_ADDRESS = ("localhost", logging.handlers.SYSLOG_UDP_PORT)

PRIORITY_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "err": logging.ERROR,
    "error": logging.ERROR,
    "crit": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emerg": logging.CRITICAL,
}


def parse_address(value: Optional[str]) -> Union[str, Tuple[str, int]]:
    """
    Parse a syslog_address property.

    Args:
        value: ``host:port``, ``host`` or a unix socket path; None for default

    Returns:
        Address usable by SysLogHandler
    """
    if not value:
        return DEFAULT_SOCKET if os.path.exists(DEFAULT_SOCKET) else DEFAULT_ADDRESS

    value = value.strip()
    if value.startswith("/"):
        return value

    host, sep, port = value.rpartition(":")
    if sep and port.isdigit():
        return (host or "localhost", int(port))
    return (value, logging.handlers.SYSLOG_UDP_PORT)


class SysLogSink(NullSink):
    """
    Sink sending each line of output as a syslog message.

    Properties read from ``props``: syslog_address, syslog_facility,
    syslog_priority and syslog_tag (defaults to the program name).
    """

    def __init__(
        self,
        program_name: str,
        props: Optional[Dict[str, str]] = None,
        emitter: Optional[LogEventEmitter] = None,
        handler: Optional[logging.Handler] = None,
    ):
        super().__init__(emitter)
        props = props or {}

        self.tag = props.get("syslog_tag") or program_name

        priority = props.get("syslog_priority", "info").strip().lower()
        if priority not in PRIORITY_LEVELS:
            logger.warning("Unknown syslog priority", priority=priority, program=program_name)
        self.level = PRIORITY_LEVELS.get(priority, logging.INFO)

        if handler is None:
            facility_name = props.get("syslog_facility", "user").strip().lower()
            facility = logging.handlers.SysLogHandler.facility_names.get(facility_name)
            if facility is None:
                logger.warning(
                    "Unknown syslog facility",
                    facility=facility_name,
                    program=program_name,
                )
                facility = logging.handlers.SysLogHandler.LOG_USER

            handler = logging.handlers.SysLogHandler(
                address=parse_address(props.get("syslog_address")),
                facility=facility,
            )

        handler.setFormatter(logging.Formatter("%(message)s"))
        self.handler = handler

    def write(self, data: bytes) -> int:
        text = data.decode("utf-8", errors="replace")
        for line in text.splitlines():
            if not line.strip():
                continue
            record = logging.LogRecord(
                name=self.tag,
                level=self.level,
                pathname="",
                lineno=0,
                msg=f"{self.tag}: {line}",
                args=None,
                exc_info=None,
            )
            self.handler.handle(record)

        self.emitter.emit_log_event(data)
        return len(data)

    def close(self) -> None:
        self.handler.close()

    def __repr__(self) -> str:
        return f"SysLogSink(tag={self.tag!r})"
