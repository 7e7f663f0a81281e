"""
Error kinds raised by sinks.

I/O failures are not wrapped: open/stat/rename/read/write errors propagate as
the built-in OSError family so callers see the filesystem's own errno.
"""


class ProcLogError(Exception):
    """Base class for proclog errors."""
    pass


class InvalidArgumentsError(ProcLogError, ValueError):
    """Raised when an offset/length combination is malformed."""
    pass


class NoSuchStreamError(ProcLogError):
    """Raised when reading or clearing a sink that keeps no history."""
    pass


class UnsupportedOperationError(ProcLogError):
    """Raised when a sink kind cannot perform the requested operation."""
    pass
