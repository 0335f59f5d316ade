from __future__ import annotations

import logging
import select
from typing import IO, Any, Optional, Union

logger = logging.getLogger(__name__)

# Anything with fileno() (text/binary files, sockets) or a raw descriptor.
StreamLike = Union[IO[Any], int]


def resolve_fd(stream: StreamLike) -> Optional[int]:
    """
    Return the OS-level descriptor behind `stream`, or None if it has none.

    Closed files raise ValueError from fileno(); in-memory buffers raise
    io.UnsupportedOperation (an OSError/ValueError subclass). Both map to None.
    """
    if isinstance(stream, bool):
        return None
    if isinstance(stream, int):
        return stream if stream >= 0 else None

    fileno = getattr(stream, "fileno", None)
    if fileno is None:
        return None
    try:
        fd = fileno()
    except (OSError, ValueError):
        return None
    return fd if isinstance(fd, int) and fd >= 0 else None


def supports_polling(stream: StreamLike) -> bool:
    """
    Capability check only: True if `stream` resolves to a descriptor select() accepts.
    """
    fd = resolve_fd(stream)
    if fd is None:
        return False
    try:
        select.select([fd], [], [], 0)
    except (OSError, ValueError):
        return False
    return True


def input_ready(stream: StreamLike, wait: Optional[float] = 0.0) -> bool:
    """
    Report whether `stream` has at least one byte (or EOF) readable right now.

    wait:
      - 0 (default): poll and return immediately
      - > 0: wait at most that many seconds
      - None: block until the stream becomes readable

    Nothing is consumed. Handles the platform cannot poll report not-ready:
    on Windows select() only accepts sockets, so consoles and pipes land here.

    We use `select` rather than `selectors` because the latter raises
    PermissionError when stdin is redirected from /dev/null.
    """
    fd = resolve_fd(stream)
    if fd is None:
        return False

    timeout = None if wait is None else max(0.0, float(wait))
    try:
        r, _, _ = select.select([fd], [], [], timeout)
    except (OSError, ValueError) as e:
        logger.debug(f"[poll] fd={fd} not pollable: {e!r}")
        return False
    return bool(r)
