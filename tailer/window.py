"""Fixed-capacity window of the most recently seen lines."""

from collections import deque
from typing import Iterator, TextIO


class SlidingWindow:
    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._lines: deque[str] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._lines)

    def push(self, line: str):
        """Append a line, evicting the oldest if over capacity."""
        self._lines.append(line)
        if len(self._lines) > self._capacity:
            self._lines.popleft()

    def drain(self) -> Iterator[str]:
        """Yield lines oldest-first, leaving the window empty."""
        while self._lines:
            yield self._lines.popleft()

    def write_to(self, out: TextIO) -> int:
        """Drain into ``out``, one terminated line each. Returns the line count."""
        count = 0
        for line in self.drain():
            out.write(line + "\n")
            count += 1
        out.flush()
        return count
