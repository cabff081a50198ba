"""Resumable forward reading of a file by byte offset.

A ``ForwardCursor`` records how far into a file complete lines have been
consumed. ``resume`` reads from that offset to the current end of file,
pushes every complete line into a window and returns the advanced cursor.
The cursor is a plain value, so the follow loop owns it explicitly and
threads it through every call.
"""

import logging
import os
from dataclasses import dataclass, replace

from tailer.readers import DEFAULT_CHUNK_SIZE, decode_line
from tailer.window import SlidingWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForwardCursor:
    path: str
    offset: int = 0
    inode: int | None = None

    def check_truncation(self, size: int, inode: int) -> "ForwardCursor":
        """Restart from offset 0 if the file was replaced or shrank."""
        if self.inode is not None and inode != self.inode:
            logger.info("File rotated (inode changed): %s", self.path)
            return replace(self, offset=0, inode=inode)
        if size < self.offset:
            logger.info("File truncated: %s", self.path)
            return replace(self, offset=0, inode=inode)
        return replace(self, inode=inode)


def resume(cursor: ForwardCursor, window: SlidingWindow, *, flush_partial: bool = False,
           chunk_size: int = DEFAULT_CHUNK_SIZE) -> ForwardCursor:
    """Push lines appended since ``cursor`` into ``window``.

    An unterminated trailing fragment is left unread so it can be picked up
    whole once its terminator arrives, unless ``flush_partial`` is set, in
    which case it is pushed as the final line. Raises OSError on I/O failure.
    """
    with open(cursor.path, "rb") as f:
        st = os.fstat(f.fileno())
        cursor = cursor.check_truncation(st.st_size, st.st_ino)
        f.seek(cursor.offset)

        offset = cursor.offset
        pending = b""
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            parts = (pending + chunk).split(b"\n")
            pending = parts.pop()
            for raw in parts:
                window.push(decode_line(raw))
                offset += len(raw) + 1

        if pending and flush_partial:
            window.push(decode_line(pending))
            offset += len(pending)

    return replace(cursor, offset=offset)
