"""Follow mode: keep emitting lines appended to one file.

A watchdog observer thread posts filesystem events for the file's
directory onto a queue. ``FollowController`` consumes that queue on the
calling thread, in delivery order, and after every content change resumes
its forward cursor to print whatever was appended.
"""

import enum
import logging
import os
import queue
from typing import Callable, TextIO

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from tailer.config import TailConfig
from tailer.cursor import ForwardCursor, resume
from tailer.errors import SourceReadError, TailError, WatchError
from tailer.window import SlidingWindow

logger = logging.getLogger(__name__)

CHANNEL_TIMEOUT = 1.0
CONTENT_EVENTS = ("modified", "created", "moved")


class FollowState(enum.Enum):
    INITIAL = "initial"
    WATCHING = "watching"
    TERMINATED = "terminated"


def make_observer(config: TailConfig):
    """Native change events by default, stat polling when configured."""
    if config.use_polling:
        return PollingObserver(timeout=config.poll_interval)
    return Observer()


class _ChannelHandler(FileSystemEventHandler):
    """Forwards every event from the observer thread onto the channel."""

    def __init__(self, channel: queue.Queue):
        super().__init__()
        self._channel = channel

    def on_any_event(self, event):
        self._channel.put(event)


def _event_path(path) -> str:
    return os.path.realpath(os.fsdecode(path))


class FollowController:
    def __init__(self, name: str, path: str, config: TailConfig, out: TextIO,
                 observer_factory: Callable | None = None):
        self.name = name
        # Events for a symlinked file arrive under the target's path.
        self.path = os.path.realpath(path)
        self.state = FollowState.INITIAL
        self.cursor = ForwardCursor(self.path)
        self.error: TailError | None = None
        self._config = config
        self._out = out
        self._observer_factory = observer_factory or (lambda: make_observer(config))
        self._observer = None
        self._channel: queue.Queue = queue.Queue()

    @property
    def channel(self) -> queue.Queue:
        return self._channel

    def start(self):
        """Emit the starting window, then register the watch.

        Raises SourceReadError or WatchError, leaving the controller
        TERMINATED.
        """
        if self.state is not FollowState.INITIAL:
            raise RuntimeError(f"cannot start follow from state {self.state.value}")

        self._resume(flush_partial=True)
        self._register()
        self.state = FollowState.WATCHING
        logger.info("Following %s", self.path)

        # Anything appended between the first read and registration.
        self._resume()

    def run(self):
        """Consume notifications until a fatal error. Never returns normally."""
        while self.state is FollowState.WATCHING:
            self.poll_once()

    def poll_once(self, timeout: float = CHANNEL_TIMEOUT) -> int:
        """Handle at most one notification. Returns the number of lines printed."""
        try:
            event = self._channel.get(timeout=timeout)
        except queue.Empty:
            if self._observer is not None and not self._observer.is_alive():
                self._terminate(WatchError(self.name, "watch channel closed"))
            return 0

        if not self.is_content_change(event):
            logger.debug("Ignoring %s event for %s", event.event_type, event.src_path)
            return 0
        return self._resume()

    def is_content_change(self, event: FileSystemEvent) -> bool:
        if event.is_directory or event.event_type not in CONTENT_EVENTS:
            return False
        if event.event_type == "moved":
            return _event_path(event.dest_path) == self.path
        return _event_path(event.src_path) == self.path

    def close(self):
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    def _resume(self, flush_partial: bool = False) -> int:
        # A fresh window per pass, so only the increment is printed.
        window = SlidingWindow(self._config.line_count)
        try:
            self.cursor = resume(self.cursor, window, flush_partial=flush_partial,
                                 chunk_size=self._config.chunk_size)
        except OSError as e:
            self._terminate(SourceReadError(self.name, e.strerror or e))
        return window.write_to(self._out)

    def _register(self):
        observer = self._observer_factory()
        try:
            observer.schedule(_ChannelHandler(self._channel), os.path.dirname(self.path),
                              recursive=False)
            observer.start()
        except OSError as e:
            self._terminate(WatchError(self.name, f"cannot watch: {e.strerror or e}"))
        self._observer = observer

    def _terminate(self, error: TailError):
        self.state = FollowState.TERMINATED
        self.error = error
        logger.info("Follow of %s terminated: %s", self.path, error)
        self.close()
        raise error
