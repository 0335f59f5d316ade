from __future__ import annotations

import logging
import os
import sys
from typing import IO, Callable, Optional

from .config import DEFAULT_CONFIG, DrainConfig
from .drain import drain_input
from .poll import input_ready, resolve_fd

logger = logging.getLogger(__name__)

DiscardHook = Callable[[bytes], None]


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _readline(stream: IO[str]) -> str:
    """
    Read one line straight from the descriptor, a byte at a time.

    Bypasses the file object's buffer so select() still sees every unread byte.
    """
    fd = resolve_fd(stream)
    if fd is None:
        return stream.readline()

    buf = bytearray()
    while True:
        b = os.read(fd, 1)
        if not b:
            break
        buf += b
        if b == b"\n":
            break

    encoding = getattr(stream, "encoding", None) or "utf-8"
    return buf.decode(encoding, errors="replace")


def _is_tty(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def _drop_stale(stream: IO[str], on_discard: Optional[DiscardHook], config: Optional[DrainConfig]) -> None:
    cfg = config or DEFAULT_CONFIG
    stale = drain_input(stream, chunk_size=cfg.chunk_size, max_bytes=cfg.max_bytes)
    if not stale:
        return
    logger.debug(f"[prompt] dropped {len(stale)} stale byte(s) before prompt")
    if on_discard is not None:
        on_discard(stale)


def read_prompted(
    prompt: str = "",
    stream: Optional[IO[str]] = None,
    output: Optional[IO[str]] = None,
    on_discard: Optional[DiscardHook] = None,
    config: Optional[DrainConfig] = None,
) -> str:
    """
    Discard whatever was typed ahead, then show `prompt` and block for one line.

    With the default stdin/stdout on a terminal the builtin input() does the
    reading so readline editing keeps working. A terminal in canonical mode
    hands over one line per read, so nothing is left in sys.stdin's buffer.
    Redirected stdin is read from the descriptor like an explicit stream.

    Raises EOFError at end of input.
    """
    src = sys.stdin if stream is None else stream
    use_builtin = stream is None and output is None and _is_tty(src)

    _drop_stale(src, on_discard, config)

    if use_builtin:
        return input(prompt)

    out = sys.stdout if output is None else output
    out.write(prompt)
    out.flush()

    line = _readline(src)
    if not line:
        raise EOFError("EOF when reading a line")
    return _strip_terminator(line)


def read_prompted_block(
    prompt: str = "you> ",
    stream: Optional[IO[str]] = None,
    output: Optional[IO[str]] = None,
    paste_window_s: float = 0.02,
    on_discard: Optional[DiscardHook] = None,
    config: Optional[DrainConfig] = None,
) -> Optional[str]:
    """
    Read one user "turn", while also being friendly to multi-line pastes.

    Behavior:
      - drops stale input, then reads the first line via read_prompted()
      - then collects any lines that keep arriving within `paste_window_s`

    Returns None on EOF/Ctrl+C at the prompt.

    Notes:
      - Where the stream cannot be polled (notably Windows consoles) only the
        first line is returned.
    """
    src = sys.stdin if stream is None else stream

    try:
        first = read_prompted(prompt, stream=stream, output=output, on_discard=on_discard, config=config)
    except (EOFError, KeyboardInterrupt):
        return None

    if not first.strip():
        return ""

    lines = [first]
    while input_ready(src, paste_window_s):
        nxt = _readline(src)
        if not nxt:
            break
        lines.append(_strip_terminator(nxt))

    return "\n".join(lines).rstrip()
