"""
Structured logging for proclog's own diagnostics.

Sinks report their lifecycle (open, rotation, clears) and the failures they
swallow (secondary sink writes, listener errors, rotation renames) through
structlog. None of this touches the process output the sinks persist, so the
default destination is stderr: stdout may be carrying a child's mirrored
output.
"""

import logging
import sys
from typing import Any, List, TextIO

import structlog
from structlog.types import EventDict, Processor

LOG_FORMATS = ("json", "console")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every entry with the library name."""
    event_dict["app"] = "proclog"
    return event_dict


def _open_output(log_output: str) -> TextIO:
    """Resolve stdout, stderr or a file path to a text stream."""
    if log_output == "stdout":
        return sys.stdout
    if log_output == "stderr":
        return sys.stderr
    return open(log_output, "a", encoding="utf-8")


def _build_processors(log_format: str) -> List[Processor]:
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {log_format!r}, expected one of {LOG_FORMATS}")

    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_app_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    log_output: str = "stderr",
) -> None:
    """
    Configure structured logging for the library.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: json or console
        log_output: stdout, stderr or a file path to append to

    Raises:
        ValueError: If log_format is unknown
    """
    processors = _build_processors(log_format)

    logging.basicConfig(
        format="%(message)s",
        stream=_open_output(log_output),
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_config(config: Any) -> None:
    """
    Configure logging from a loaded Config instance.

    Args:
        config: Config providing logging.level, logging.format, logging.output
    """
    configure_logging(
        log_level=config.get("logging.level", "INFO"),
        log_format=config.get("logging.format", "console"),
        log_output=config.get("logging.output", "stderr"),
    )


def bind_program(program_name: str, channel: str) -> None:
    """
    Attach the program and channel to diagnostics logged by this thread.

    Args:
        program_name: Supervised program the sinks belong to
        channel: stdout or stderr
    """
    structlog.contextvars.bind_contextvars(program=program_name, channel=channel)


def unbind_program() -> None:
    """Remove the context set by bind_program."""
    structlog.contextvars.unbind_contextvars("program", "channel")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for a proclog module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog logger
    """
    return structlog.get_logger(name)
