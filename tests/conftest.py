"""
Shared fixtures: real OS pipes stand in for stdin.
"""

import os
import sys

import pytest

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class Pipe:
    """Read end wrapped as a text file (like sys.stdin) plus a raw write end."""

    def __init__(self) -> None:
        r, w = os.pipe()
        self.reader = os.fdopen(r, "r", encoding="utf-8")
        self.write_fd = w

    @property
    def read_fd(self) -> int:
        return self.reader.fileno()

    def write(self, data: bytes) -> None:
        os.write(self.write_fd, data)

    def close_writer(self) -> None:
        if self.write_fd >= 0:
            os.close(self.write_fd)
            self.write_fd = -1

    def close(self) -> None:
        self.close_writer()
        self.reader.close()


@pytest.fixture
def pipe():
    if sys.platform.startswith("win"):
        pytest.skip("select() only polls sockets on Windows")
    p = Pipe()
    try:
        yield p
    finally:
        p.close()
