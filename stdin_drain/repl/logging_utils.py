from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import datetime
import json
import logging
from pathlib import Path, PurePath
import sys
from typing import Any, Tuple


def safe_to_json(obj: Any) -> Any:
    """
    Convert arbitrary objects into something JSON-serializable for JSONL logging.

    Drained input is bytes; it is decoded with replacement so odd terminal
    escape sequences never break a log line.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return safe_to_json(asdict(obj))

    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj

    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).decode("utf-8", errors="replace")

    if isinstance(obj, PurePath):
        return str(obj)

    if isinstance(obj, dict):
        return {str(k): safe_to_json(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [safe_to_json(x) for x in obj]

    return str(obj)


def setup_run_logger(log_dir: Path) -> Tuple[logging.Logger, Path, Path]:
    """
    Creates:
      - a human-readable text log
      - a structured JSONL log (one event per line)

    IMPORTANT: we do not log to stdout because it would corrupt the interactive prompt.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    text_path = log_dir / f"session_{stamp}.log"
    jsonl_path = log_dir / f"session_{stamp}.jsonl"

    logger = logging.getLogger("stdin_drain")
    logger.setLevel(logging.DEBUG)
    close_run_logger(logger)

    fh = logging.FileHandler(text_path, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(fh)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.WARNING)
    ch.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger.addHandler(ch)

    return logger, text_path, jsonl_path


def close_run_logger(logger: logging.Logger) -> None:
    """
    Detach and close every handler setup_run_logger() installed (releases the log file).
    """
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


def append_jsonl(jsonl_path: Path, record: dict[str, Any]) -> None:
    """
    Append one JSON object per line (JSONL).
    """
    jsonl_path.parent.mkdir(parents=True, exist_ok=True)
    with jsonl_path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(safe_to_json(record), ensure_ascii=False) + "\n")


def preview(data: bytes, max_chars: int = 80) -> str:
    """
    Short printable rendering of discarded input for the console.
    """
    s = repr(bytes(data).decode("utf-8", errors="replace"))
    if len(s) <= max_chars:
        return s
    return s[:max_chars] + "...[truncated]"
