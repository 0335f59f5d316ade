from __future__ import annotations

from dataclasses import replace
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional

from stdin_drain.config import DrainConfig
from stdin_drain.drain import DrainError
from stdin_drain.prompt import DiscardHook, read_prompted_block

from .config import ReplConfig
from .logging_utils import append_jsonl, close_run_logger, preview, setup_run_logger

# (prompt, on_discard) -> line, or None on EOF/Ctrl+C
Reader = Callable[[str, DiscardHook], Optional[str]]


def _default_reader(cfg: ReplConfig) -> Reader:
    def reader(prompt: str, on_discard: DiscardHook) -> Optional[str]:
        return read_prompted_block(
            prompt,
            paste_window_s=cfg.paste_window_s,
            on_discard=on_discard,
            config=cfg.drain,
        )

    return reader


def run_repl(config: Optional[ReplConfig] = None, reader: Optional[Reader] = None) -> int:
    """
    Demo loop: pretend to work, then prompt with stale input cleared first.
    Returns a process exit code (0 for normal exit).
    """
    cfg = config or ReplConfig()
    if cfg.drain is None:
        cfg = replace(cfg, drain=DrainConfig.from_env())
    read = reader or _default_reader(cfg)

    log_dir = cfg.log_dir if cfg.log_dir is not None else Path.cwd() / "logs"
    logger, _text_path, jsonl_path = setup_run_logger(log_dir)

    try:
        append_jsonl(jsonl_path, {"event": "repl_start", "config": cfg, "ts": time.time()})
        return _session(cfg, read, logger, jsonl_path)
    finally:
        close_run_logger(logger)


def _session(cfg: ReplConfig, read: Reader, logger: logging.Logger, jsonl_path: Path) -> int:
    print("stdin_drain demo. Type while it is busy; that input gets dropped. Type 'exit' to quit.\n")

    turn_id = 0
    while True:
        turn_id += 1

        if cfg.busy_s > 0:
            print(f"[busy for {cfg.busy_s:g}s, typing now is discarded]")
            sys.stdout.flush()
            try:
                time.sleep(cfg.busy_s)
            except KeyboardInterrupt:
                print("\nBye.")
                logger.info("[repl] interrupted while busy")
                append_jsonl(jsonl_path, {"event": "repl_exit", "reason": "interrupt", "ts": time.time()})
                return 0

        discarded: list[bytes] = []

        def on_discard(data: bytes) -> None:
            discarded.append(data)
            print(f"[discarded {len(data)} stale byte(s): {preview(data)}]")

        try:
            user_input = read(cfg.prompt, on_discard)
        except DrainError as e:
            print(f"\n[error] could not clear pending input: {e}")
            logger.error(f"[repl] turn {turn_id}: drain failed after {len(e.partial)} byte(s): {e}")
            append_jsonl(
                jsonl_path,
                {"event": "repl_exit", "reason": "drain_error", "error": str(e), "partial": e.partial, "ts": time.time()},
            )
            return 1

        stale = b"".join(discarded)
        if stale:
            logger.info(f"[repl] turn {turn_id}: discarded {len(stale)} stale byte(s)")

        if user_input is None:
            print("\nBye.")
            logger.info("[repl] exit at prompt")
            append_jsonl(jsonl_path, {"event": "repl_exit", "reason": "prompt_exit", "ts": time.time()})
            return 0

        append_jsonl(
            jsonl_path,
            {
                "event": "turn",
                "turn_id": turn_id,
                "discarded": stale,
                "discarded_len": len(stale),
                "user_input": user_input,
                "ts": time.time(),
            },
        )

        if not user_input.strip():
            continue

        if user_input.strip().lower() in {"exit", "quit"}:
            print("Bye.")
            logger.info("[repl] user requested exit")
            append_jsonl(jsonl_path, {"event": "repl_exit", "reason": "user_exit", "ts": time.time()})
            return 0

        print(f"got> {user_input}\n")
        sys.stdout.flush()
