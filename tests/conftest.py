"""Shared pytest fixtures for the tailer test suite."""

from __future__ import annotations

import pytest

from tailer.config import TailConfig


@pytest.fixture()
def write_file(tmp_path):
    """Return a helper that writes bytes or text to a file under tmp_path."""

    def _write(name: str, content: bytes | str):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture()
def numbered_file(write_file):
    """A file with 20 lines: 'line 1' .. 'line 20', newline terminated."""
    return write_file("numbered.txt", "".join(f"line {i}\n" for i in range(1, 21)))


@pytest.fixture()
def config() -> TailConfig:
    return TailConfig()
