from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Callable, Mapping, Optional, TypeVar


T = TypeVar("T")

ENV_CHUNK_SIZE = "STDIN_DRAIN_CHUNK_SIZE"
ENV_MAX_BYTES = "STDIN_DRAIN_MAX_BYTES"


@dataclass(frozen=True, slots=True)
class DrainConfig:
    """
    Tunables shared by the poller/drainer/prompt helpers.

    Call sites that pass nothing fall back to DEFAULT_CONFIG.
    """

    # Upper bound for a single raw read while draining.
    chunk_size: int = 4096

    # Stop draining after this many bytes (None = until the stream is quiet).
    max_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.max_bytes is not None and self.max_bytes < 0:
            raise ValueError(f"max_bytes must be >= 0, got {self.max_bytes}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DrainConfig":
        """
        Build a config from STDIN_DRAIN_* variables; unset/blank ones keep the defaults.
        """
        env = os.environ if environ is None else environ
        base = cls()
        return cls(
            chunk_size=_env_value(env, ENV_CHUNK_SIZE, int, base.chunk_size),
            max_bytes=_env_value(env, ENV_MAX_BYTES, int, base.max_bytes),
        )


def _env_value(env: Mapping[str, str], name: str, parse: Callable[[str], T], default):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return parse(raw)
    except ValueError as e:
        raise ValueError(f"invalid {name}={raw!r}: {e}") from e


DEFAULT_CONFIG = DrainConfig()
