"""tailer — emit the last N lines of files or standard input, optionally following."""

__version__ = "0.1.0"
