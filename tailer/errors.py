"""Error taxonomy for the tailing engine."""


class TailError(Exception):
    """Base class for every error the tailing engine reports."""


class ConfigError(TailError):
    """Invalid configuration, rejected before any source is opened."""


class SourceError(TailError):
    """A failure tied to one named source."""

    def __init__(self, name: str, cause: BaseException | str):
        self.name = name
        self.cause = cause
        super().__init__(f"{name}: {cause}")


class SourceOpenError(SourceError):
    """A named source could not be opened."""


class SourceReadError(SourceError):
    """An I/O failure while reading a source forward or backward.

    ``partial`` holds the window read before the failure when those lines
    are still meant to be emitted.
    """

    def __init__(self, name: str, cause: BaseException | str, partial=None):
        super().__init__(name, cause)
        self.partial = partial


class WatchError(SourceError):
    """The change-notification subsystem could not register or lost its channel."""
