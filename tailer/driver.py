"""Fan-out over every requested source, one independent pipeline each."""

import logging
import sys
from typing import BinaryIO, Callable, TextIO

from tailer.config import TailConfig
from tailer.errors import SourceError, SourceReadError, TailError
from tailer.follow import FollowController, FollowState
from tailer.readers import populate_window
from tailer.source import STDIN_MARKER, SourceDescriptor, open_source

logger = logging.getLogger(__name__)


class TailRun:
    """One invocation over a list of sources.

    Per-source open and read failures are reported on ``stderr`` and
    recorded; they never stop the remaining sources, except a failure of
    the followed source, which ends the invocation. In follow mode the
    first source that opens as a seekable regular file is followed once
    every source has had its one-shot emission.
    """

    def __init__(self, config: TailConfig, stdout: TextIO | None = None,
                 stderr: TextIO | None = None, stdin: BinaryIO | None = None,
                 observer_factory: Callable | None = None):
        self.config = config.validate()
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.stdin = stdin
        self.failures: list[TailError] = []
        self.controller: FollowController | None = None
        self._observer_factory = observer_factory

    @property
    def exit_status(self) -> int:
        return 1 if self.failures else 0

    @property
    def follow_failed(self) -> bool:
        return self.controller is not None and self.controller.state is FollowState.TERMINATED

    def run(self, identifiers: list[str]) -> int:
        for identifier in identifiers or [STDIN_MARKER]:
            self.process(identifier)
            if self.follow_failed:
                # A failed followed source ends the whole invocation.
                return self.exit_status

        if self.config.follow:
            self.follow()
        return self.exit_status

    def process(self, identifier: str):
        try:
            with open_source(identifier, self.stdin) as source:
                if self._wants_follow(source):
                    self._start_follow(source)
                else:
                    self._emit_once(source)
        except SourceError as e:
            self.report(e)

    def follow(self):
        """Block on the followed source until a fatal follow error."""
        if self.controller is None:
            logger.warning("Follow requested but no source is a seekable regular file")
            return
        if self.controller.state is not FollowState.WATCHING:
            return
        try:
            self.controller.run()
        except SourceError as e:
            self.report(e)
        finally:
            self.controller.close()

    def report(self, error: TailError):
        self.failures.append(error)
        print(f"tail: {error}", file=self.stderr)
        self.stderr.flush()

    def _wants_follow(self, source: SourceDescriptor) -> bool:
        # Standard input redirected from a file is seekable but has no path to watch.
        return (self.config.follow and self.controller is None
                and source.seekable and source.path is not None)

    def _start_follow(self, source: SourceDescriptor):
        self.controller = FollowController(source.name, source.path, self.config,
                                           self.stdout, self._observer_factory)
        self.controller.start()

    def _emit_once(self, source: SourceDescriptor):
        try:
            window = populate_window(source, self.config.line_count, self.config.chunk_size)
        except SourceReadError as e:
            if e.partial is not None:
                e.partial.write_to(self.stdout)
            raise
        window.write_to(self.stdout)


def tail_sources(identifiers: list[str], config: TailConfig, **kwargs) -> int:
    """Tail every identifier in order and return the exit status."""
    return TailRun(config, **kwargs).run(identifiers)
