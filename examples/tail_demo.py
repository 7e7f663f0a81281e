#!/usr/bin/env python3
"""
Demo of capturing process output with rotation and tail-follow reads.

Writes output through a dispatcher mirroring to a rotating file and stdout,
then follows the active file the way a remote tail client would.
"""

import tempfile
import threading
import time
from pathlib import Path

from proclog import ProcessLogChannel, ProcessLogEventEmitter, create_logger
from proclog.utils.logging import configure_logging


def main():
    configure_logging(log_level="INFO", log_format="console")

    print("=" * 60)
    print("proclog - Rotation and Tail Demo")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = Path(tmpdir) / "worker.log"

        emitter = ProcessLogEventEmitter("worker", ProcessLogChannel.STDOUT)
        emitter.subscribe(lambda event: print(f"  [event] {event.event_type} {len(event.data)} bytes"))

        print("\n[1] Creating logger (file + stdout mirror)...")
        logger = create_logger(
            "worker",
            f"{log_path}, /dev/stdout",
            threading.Lock(),
            max_bytes=200,
            backups=3,
            emitter=emitter,
        )

        print("\n[2] Writing 12 lines...")
        for i in range(12):
            logger.write(f"worker line {i:02d}\n".encode())
            time.sleep(0.01)

        print("\n[3] Last 32 bytes of the active file:")
        print(logger.read_range(-32, 0).decode())

        print("[4] Following the active file from offset 0:")
        offset = 0
        while True:
            result = logger.read_tail(offset, 64)
            if result.eof:
                break
            print(f"  read {len(result.data)} bytes, next offset {result.offset}")
            offset = result.offset

        print("\n[5] Backups on disk:")
        for backup in sorted(Path(tmpdir).glob("worker.log.*")):
            print(f"  {backup.name}: {backup.stat().st_size} bytes")

        logger.clear_all()
        logger.close()
        print("\n✅ Cleared and closed")


if __name__ == "__main__":
    main()
