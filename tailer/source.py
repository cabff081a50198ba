"""Line sources: a named handle over a regular file or standard input."""

import logging
import os
import stat
import sys
from dataclasses import dataclass
from typing import BinaryIO

from tailer.errors import SourceOpenError

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"
STDIN_NAME = "standard input"


@dataclass
class SourceDescriptor:
    name: str
    handle: BinaryIO
    seekable: bool
    path: str | None = None   # None for standard input
    owned: bool = True        # False when the handle must outlive us (stdin)

    def close(self):
        if self.owned:
            self.handle.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def is_seekable(handle: BinaryIO) -> bool:
    """True only for a regular file that supports random access.

    Pipes, FIFOs, terminals and character devices report False even when
    the underlying object claims to be seekable.
    """
    try:
        mode = os.fstat(handle.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        # In-memory streams have no descriptor; treat them as streams.
        return False
    return stat.S_ISREG(mode) and handle.seekable()


def open_source(identifier: str, stdin: BinaryIO | None = None) -> SourceDescriptor:
    """Open a source by path, or standard input for the ``-`` marker."""
    if identifier == STDIN_MARKER:
        handle = stdin if stdin is not None else sys.stdin.buffer
        return SourceDescriptor(
            name=STDIN_NAME,
            handle=handle,
            seekable=is_seekable(handle),
            owned=False,
        )

    try:
        handle = open(identifier, "rb")
    except OSError as e:
        raise SourceOpenError(identifier, e.strerror or e) from e

    seekable = is_seekable(handle)
    logger.debug("Opened %s (seekable=%s)", identifier, seekable)
    return SourceDescriptor(
        name=identifier,
        handle=handle,
        seekable=seekable,
        path=os.path.abspath(identifier),
    )
