"""
Thread-safe writes to a shared stream.
"""

import errno
import io
import os
import threading
from typing import TextIO

# Returned by fsync on streams that can't be synced, such as terminals and
# pipes. Syncing those is a no-op rather than an error.
_UNSYNCABLE = (errno.EINVAL, errno.ENOTTY, errno.EROFS)


class SyncWriter:
    """
    Serializes writes to a stream.

    The lock is held only while a single write or sync is in progress, so
    entries are formatted concurrently and never interleave in the output.
    """

    def __init__(self, stream: TextIO, owns_stream: bool = False) -> None:
        self.stream = stream
        self.owns_stream = owns_stream
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        with self._lock:
            self.stream.write(text)

    def sync(self) -> None:
        """
        Flush the stream and fsync its file descriptor when it has one.

        Raises:
            OSError: If syncing a real file fails
        """
        with self._lock:
            self.stream.flush()
            try:
                fd = self.stream.fileno()
            except (AttributeError, io.UnsupportedOperation):
                return
            try:
                os.fsync(fd)
            except OSError as e:
                if e.errno not in _UNSYNCABLE:
                    raise

    def close(self) -> None:
        """Sync, then close the stream if this writer owns it."""
        if self.owns_stream and self.stream.closed:
            return
        self.sync()
        if self.owns_stream:
            with self._lock:
                self.stream.close()
