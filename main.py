#!/usr/bin/env python3
"""
main.py is intentionally tiny.

The demo session lives in `stdin_drain.repl`; the reusable helpers live in
`stdin_drain.poll`, `stdin_drain.drain` and `stdin_drain.prompt`.
"""

from __future__ import annotations

import sys

from stdin_drain.repl.app import run_repl


if __name__ == "__main__":
    sys.exit(run_repl())
