from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from stdin_drain.config import DrainConfig


@dataclass(frozen=True, slots=True)
class ReplConfig:
    """
    Tunables for the demo session.

    Keeping these in a dataclass makes it easy to override in tests.
    """

    prompt: str = "you> "

    # Simulated work before each prompt; whatever is typed meanwhile is stale.
    busy_s: float = 3.0

    # Lines arriving this close together are treated as one paste.
    paste_window_s: float = 0.02

    # None = <cwd>/logs
    log_dir: Optional[Path] = None

    # None = DrainConfig.from_env() at session start
    drain: Optional[DrainConfig] = None
