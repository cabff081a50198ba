"""Populate a window with the last N lines of a source.

Two strategies exist. A seekable regular file is scanned backward from its
end in fixed-size chunks, so only the tail of a large file is ever read.
Anything else (stdin, pipes, FIFOs) is streamed start-to-end through the
window, which evicts old lines as it goes.
"""

import enum
import logging
import os
from itertools import islice
from typing import BinaryIO, Iterator

from tailer.errors import SourceReadError
from tailer.source import SourceDescriptor
from tailer.window import SlidingWindow

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192


class Strategy(enum.Enum):
    REVERSE_SCAN = "reverse-scan"
    FORWARD_STREAM = "forward-stream"


def select_strategy(source: SourceDescriptor) -> Strategy:
    if source.seekable:
        return Strategy.REVERSE_SCAN
    return Strategy.FORWARD_STREAM


def decode_line(raw: bytes) -> str:
    """Decode one raw line (terminator already removed), dropping a CR."""
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode("utf-8", errors="replace")


def reverse_lines(handle: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield raw lines last-to-first, reading chunks backward from the end.

    The leftmost fragment of every chunk may be the tail of a line that
    started in an earlier chunk, so it is carried over and prepended to the
    next read instead of being yielded. Bytes before the handle's current
    position are not part of the stream and are never read.
    """
    start = handle.tell()
    size = handle.seek(0, os.SEEK_END)
    if size <= start:
        return

    pos = size
    residual = b""
    at_end = True
    while pos > start:
        read_size = min(chunk_size, pos - start)
        pos -= read_size
        handle.seek(pos)
        chunk = handle.read(read_size)
        if len(chunk) != read_size:
            raise OSError(f"short read at offset {pos}: wanted {read_size}, got {len(chunk)}")

        data = chunk + residual
        if at_end:
            # A terminator at EOF closes the last line, it does not open a new one.
            if data.endswith(b"\n"):
                data = data[:-1]
            at_end = False

        parts = data.split(b"\n")
        residual = parts[0]
        for part in reversed(parts[1:]):
            yield part

    yield residual


def forward_lines(handle: BinaryIO) -> Iterator[bytes]:
    """Yield raw lines first-to-last with their terminator removed."""
    for raw in handle:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        yield raw


def _populate_reverse(source: SourceDescriptor, window: SlidingWindow, chunk_size: int):
    # Collect fully before pushing: a read error must leave the window empty.
    newest_first = list(islice(reverse_lines(source.handle, chunk_size), window.capacity))
    for raw in reversed(newest_first):
        window.push(decode_line(raw))


def _populate_forward(source: SourceDescriptor, window: SlidingWindow):
    for raw in forward_lines(source.handle):
        window.push(decode_line(raw))


def populate_window(source: SourceDescriptor, capacity: int,
                    chunk_size: int = DEFAULT_CHUNK_SIZE) -> SlidingWindow:
    """Fill a fresh window with the last ``capacity`` lines of ``source``.

    On a reverse-scan failure nothing is kept for the source. On a
    forward-stream failure the lines read so far are attached to the raised
    error as ``partial`` so the caller can still emit them.
    """
    window = SlidingWindow(capacity)
    strategy = select_strategy(source)
    logger.debug("Reading %s with %s", source.name, strategy.value)

    if strategy is Strategy.REVERSE_SCAN:
        try:
            _populate_reverse(source, window, chunk_size)
        except OSError as e:
            raise SourceReadError(source.name, e.strerror or e) from e
    else:
        try:
            _populate_forward(source, window)
        except OSError as e:
            raise SourceReadError(source.name, e.strerror or e, partial=window) from e

    return window
