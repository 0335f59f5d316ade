from __future__ import annotations

import logging
import os
from typing import Optional

from .config import DEFAULT_CONFIG
from .poll import StreamLike, input_ready, resolve_fd

logger = logging.getLogger(__name__)


class DrainError(OSError):
    """Raised when a read fails while draining; `partial` holds what was consumed first."""

    def __init__(self, errno: Optional[int], strerror: str, partial: bytes = b"") -> None:
        super().__init__(errno, strerror)
        self.partial = partial


def drain_input(
    stream: StreamLike,
    chunk_size: Optional[int] = None,
    max_bytes: Optional[int] = None,
) -> bytes:
    """
    Read and return everything that is pending on `stream` right now.

    Reads go straight to the descriptor in chunks (not lines), so a pending
    fragment without a newline never blocks. The loop ends when:
      - the poller reports not-ready
      - a read returns b"" (EOF is always "readable")
      - `max_bytes` have been consumed

    Bytes sitting in a Python-level buffer of a file object (e.g. left over
    from an earlier readline()) are invisible to select() and are not touched.
    """
    size = DEFAULT_CONFIG.chunk_size if chunk_size is None else chunk_size
    cap = DEFAULT_CONFIG.max_bytes if max_bytes is None else max_bytes
    if size <= 0:
        raise ValueError(f"chunk_size must be positive, got {size}")

    fd = resolve_fd(stream)
    if fd is None:
        return b""

    chunks: list[bytes] = []
    total = 0

    while cap is None or total < cap:
        if not input_ready(fd, 0):
            break

        want = size if cap is None else min(size, cap - total)
        try:
            chunk = os.read(fd, want)
        except OSError as e:
            partial = b"".join(chunks)
            raise DrainError(e.errno, f"read failed after {len(partial)} byte(s): {e}", partial) from e

        if not chunk:
            break
        chunks.append(chunk)
        total += len(chunk)

    out = b"".join(chunks)
    if out:
        logger.debug(f"[drain] fd={fd} discarded {len(out)} byte(s)")
    return out


def discard_tty_input(stream: StreamLike) -> bool:
    """
    Ask the terminal driver to drop its queued input (tcflush TCIFLUSH).

    Returns False without doing anything for non-TTYs or where termios is missing.
    """
    fd = resolve_fd(stream)
    if fd is None:
        return False
    try:
        import termios  # POSIX only
    except ImportError:
        return False

    if not os.isatty(fd):
        return False

    termios.tcflush(fd, termios.TCIFLUSH)
    logger.debug(f"[drain] fd={fd} tty input queue flushed")
    return True
