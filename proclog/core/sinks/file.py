"""
Rotating file sink.

Appends process output to a file and rotates it into numbered backups once a
size threshold is reached:

    app.log      active file
    app.log.1    most recently rotated-out file
    app.log.N    oldest backup kept (N = backups)

Every operation runs inside the injected lock so that a rotation triggered by
one thread cannot invalidate a file another thread is reading.
"""

import os
import threading
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from proclog.core.errors import InvalidArgumentsError
from proclog.core.events import LogEventEmitter, NullLogEventEmitter
from proclog.core.sinks.base import Sink, TailResult
from proclog.utils.logging import get_logger

logger = get_logger(__name__)


class FileSink(Sink):
    """
    Durable sink writing to a size-rotated file.

    The running size counter is only an approximation: it is incremented by
    the bytes each write reports and re-read from disk once it reaches the
    threshold. Rotation happens only when the on-disk size confirms it.

    Attributes:
        path: Path of the active log file
        max_bytes: Rotation threshold in bytes (<= 0 disables rotation)
        backups: Number of rotated files to keep
    """

    def __init__(
        self,
        path: Union[str, Path],
        max_bytes: int,
        backups: int,
        emitter: Optional[LogEventEmitter] = None,
        lock: Optional[Any] = None,
    ):
        """
        Initialize a file sink and open the active file for appending.

        Args:
            path: Path of the active log file
            max_bytes: Rotation threshold in bytes
            backups: Number of rotated files to keep
            emitter: Notified with the content of every successful write
            lock: Lock shared with the caller; a private lock when omitted
        """
        self.path = Path(path)
        self.max_bytes = max_bytes
        self.backups = backups
        self.emitter = emitter or NullLogEventEmitter()
        self._lock = lock if lock is not None else threading.Lock()

        self._file: Optional[BinaryIO] = None
        self._size: int = 0

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._open_file(truncate=False)
        except OSError as e:
            logger.error(
                "Failed to open log file",
                path=str(self.path),
                error=str(e),
            )

        logger.info(
            "Initialized file sink",
            path=str(self.path),
            max_bytes=self.max_bytes,
            backups=self.backups,
            size=self._size,
        )

    @property
    def size(self) -> int:
        """Running size counter (may lag the on-disk size)."""
        return self._size

    def backup_path(self, index: int) -> Path:
        """
        Build the path of a backup file.

        Args:
            index: Backup number, 1 being the most recent

        Returns:
            Path of the backup
        """
        return Path(f"{self.path}.{index}")

    def _open_file(self, truncate: bool) -> None:
        """Open the active file, truncating it if requested or missing."""
        self._close_file()

        if truncate or not self.path.exists():
            self._file = open(self.path, "wb", buffering=0)
            self._size = 0
        else:
            self._file = open(self.path, "ab", buffering=0)
            self._size = os.fstat(self._file.fileno()).st_size

    def _close_file(self) -> None:
        if self._file is not None:
            try:
                self._file.close()
            finally:
                self._file = None

    def _backup_files(self) -> None:
        """
        Shift backups up by one and move the active file to backup 1.

        The oldest backup is overwritten when all slots are in use. Rename
        failures are logged and skipped; the sequence is not crash-atomic.
        """
        for i in range(self.backups - 1, 0, -1):
            src = self.backup_path(i)
            if src.exists():
                self._rename(src, self.backup_path(i + 1))

        if self.backups > 0:
            self._rename(self.path, self.backup_path(1))

    def _rename(self, src: Path, dest: Path) -> None:
        try:
            os.replace(src, dest)
        except OSError as e:
            logger.error(
                "Failed to rename log file",
                src=str(src),
                dest=str(dest),
                error=str(e),
            )

    def _rotate(self) -> None:
        """Rotate the active file and start an empty one. Lock must be held."""
        rotated_size = self._size
        self._close_file()
        self._backup_files()

        try:
            self._open_file(truncate=True)
        except OSError as e:
            logger.error(
                "Failed to reopen log file after rotation",
                path=str(self.path),
                error=str(e),
            )

        logger.info(
            "Rotated log file",
            path=str(self.path),
            rotated_size=rotated_size,
            backups=self.backups,
        )

    def write(self, data: bytes) -> int:
        """
        Append data to the active file, rotating if the threshold is reached.

        Args:
            data: Bytes to append

        Returns:
            Number of bytes written

        Raises:
            OSError: If opening, writing or re-sizing the file fails
        """
        with self._lock:
            if self._file is None:
                self._open_file(truncate=False)

            n = self._file.write(data)

            self.emitter.emit_log_event(data)
            self._size += n

            if self.max_bytes > 0 and self._size >= self.max_bytes:
                self._size = os.stat(self.path).st_size
                if self._size >= self.max_bytes:
                    self._rotate()

            return n

    def close(self) -> None:
        """Close the active file. Safe to call more than once."""
        with self._lock:
            self._close_file()

    def set_pid(self, pid: int) -> None:
        pass

    def read_range(self, offset: int, length: int) -> bytes:
        """
        Read bytes from the active file.

        A negative offset with zero length reads the last ``-offset`` bytes.
        A non-negative offset with zero length reads to the end of the file.
        Otherwise at most ``length`` bytes are read from ``offset``. Offsets
        past the end yield empty data.

        Args:
            offset: Start position, or negative distance from the end
            length: Number of bytes, 0 meaning "to the end"

        Returns:
            Bytes read

        Raises:
            InvalidArgumentsError: If offset is negative with a non-zero length,
                or length is negative
            OSError: If the file cannot be opened or read
        """
        if offset < 0 and length != 0:
            raise InvalidArgumentsError(
                f"BAD_ARGUMENTS: negative offset {offset} requires length 0, got {length}"
            )
        if offset >= 0 and length < 0:
            raise InvalidArgumentsError(
                f"BAD_ARGUMENTS: length must be non-negative, got {length}"
            )

        with self._lock:
            with open(self.path, "rb") as f:
                file_len = os.fstat(f.fileno()).st_size

                if offset < 0:
                    start = max(file_len + offset, 0)
                    count = file_len - start
                elif length == 0:
                    if offset > file_len:
                        return b""
                    start = offset
                    count = file_len - offset
                else:
                    if offset >= file_len:
                        return b""
                    start = offset
                    count = min(length, file_len - offset)

                f.seek(start)
                return f.read(count)

    def read_tail(self, offset: int, length: int) -> TailResult:
        """
        Read up to ``length`` bytes appended at or after ``offset``.

        When ``offset`` is at or beyond the end of the file, returns empty
        data, the current file length as offset, and ``eof=True``; a follower
        should wait and retry with the returned offset.

        Args:
            offset: Position the follower has read up to
            length: Maximum number of bytes to return

        Returns:
            TailResult with the data and the next offset

        Raises:
            InvalidArgumentsError: If offset or length is negative
            OSError: If the file cannot be opened or read
        """
        if offset < 0:
            raise InvalidArgumentsError(f"offset should not be less than 0, got {offset}")
        if length < 0:
            raise InvalidArgumentsError(f"length should not be less than 0, got {length}")

        with self._lock:
            with open(self.path, "rb") as f:
                file_len = os.fstat(f.fileno()).st_size

                if offset >= file_len:
                    return TailResult(data=b"", offset=file_len, eof=True)

                f.seek(offset)
                data = f.read(min(length, file_len - offset))
                return TailResult(data=data, offset=offset + len(data), eof=False)

    def clear_current(self) -> None:
        """Truncate the active file, leaving backups in place."""
        with self._lock:
            self._open_file(truncate=True)
            logger.info("Cleared log file", path=str(self.path))

    def clear_all(self) -> None:
        """
        Delete every backup and truncate the active file.

        Raises:
            OSError: If a backup cannot be deleted; backups removed before
                the failure stay removed
        """
        with self._lock:
            for i in range(self.backups, 0, -1):
                try:
                    self.backup_path(i).unlink()
                except FileNotFoundError:
                    continue

            self._open_file(truncate=True)
            logger.info(
                "Cleared log file and backups",
                path=str(self.path),
                backups=self.backups,
            )

    def __enter__(self) -> "FileSink":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"FileSink(path={str(self.path)!r}, "
            f"max_bytes={self.max_bytes}, "
            f"backups={self.backups}, "
            f"size={self._size})"
        )
