#!/usr/bin/env python3
"""
Tests for the input poller
"""

import errno
import io
import os
import sys
import threading
import time

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import stdin_drain.poll as poll_mod
from stdin_drain.drain import drain_input
from stdin_drain.poll import input_ready, resolve_fd, supports_polling


def test_empty_stream_not_ready(pipe):
    """Nothing written yet: a zero-wait poll says not-ready"""
    assert input_ready(pipe.reader) is False
    assert input_ready(pipe.reader, 0) is False


def test_pending_data_is_ready_and_not_consumed(pipe):
    """Polling twice still sees the same pending bytes"""
    pipe.write(b"x")
    assert input_ready(pipe.reader) is True
    assert input_ready(pipe.reader) is True
    assert os.read(pipe.read_fd, 10) == b"x"
    assert input_ready(pipe.reader) is False


def test_raw_descriptor_accepted(pipe):
    pipe.write(b"abc")
    assert input_ready(pipe.read_fd) is True


def test_bounded_wait_times_out(pipe):
    t0 = time.monotonic()
    assert input_ready(pipe.reader, 0.05) is False
    assert time.monotonic() - t0 >= 0.04


def test_bounded_wait_sees_late_data(pipe):
    timer = threading.Timer(0.05, pipe.write, args=(b"late\n",))
    timer.start()
    try:
        assert input_ready(pipe.reader, 5.0) is True
    finally:
        timer.cancel()


def test_unbounded_wait_returns_once_ready(pipe):
    timer = threading.Timer(0.05, pipe.write, args=(b"go\n",))
    timer.start()
    try:
        assert input_ready(pipe.reader, None) is True
    finally:
        timer.cancel()


def test_negative_wait_is_a_poll(pipe):
    assert input_ready(pipe.reader, -1) is False


def test_eof_counts_as_ready(pipe):
    """A closed writer leaves the read end readable (read returns b'')"""
    pipe.close_writer()
    assert input_ready(pipe.reader) is True


def test_unsupported_streams_report_not_ready():
    """In-memory buffers and objects without fileno() never raise"""
    assert input_ready(io.BytesIO(b"data")) is False
    assert input_ready(io.StringIO("data")) is False
    assert input_ready(object()) is False
    assert input_ready(-1) is False
    assert supports_polling(io.BytesIO(b"data")) is False


def test_closed_stream_reports_not_ready():
    r, w = os.pipe()
    f = os.fdopen(r, "rb")
    os.close(w)
    f.close()
    assert resolve_fd(f) is None
    assert input_ready(f) is False
    assert supports_polling(f) is False


def test_supports_polling_on_pipe(pipe):
    assert supports_polling(pipe.reader) is True
    assert resolve_fd(pipe.reader) == pipe.read_fd


def test_select_rejecting_handle_reports_not_ready(pipe, monkeypatch):
    """Platforms whose select() only takes sockets degrade to not-ready"""
    pipe.write(b"pending\n")

    def socket_only_select(rlist, wlist, xlist, timeout=None):
        raise OSError(errno.ENOTSOCK, "An operation was attempted on something that is not a socket")

    monkeypatch.setattr(poll_mod.select, "select", socket_only_select)

    assert input_ready(pipe.reader) is False
    assert input_ready(pipe.reader, None) is False
    assert supports_polling(pipe.reader) is False
    assert drain_input(pipe.reader) == b""
