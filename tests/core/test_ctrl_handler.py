"""Tests for the Ctrl+C shutdown handler."""

from __future__ import annotations

import signal

import pytest

from core.ctrl_handler import CtrlCHandler


def test_first_interrupt_requests_stop():
    handler = CtrlCHandler(install=False)
    handler._signal_handler(signal.SIGINT, None)
    assert handler.should_stop is True


def test_second_interrupt_raises():
    handler = CtrlCHandler(install=False)
    handler._signal_handler(signal.SIGINT, None)
    with pytest.raises(KeyboardInterrupt):
        handler._signal_handler(signal.SIGINT, None)


def test_restore_reinstalls_previous_handler():
    previous = signal.getsignal(signal.SIGINT)
    handler = CtrlCHandler()
    assert signal.getsignal(signal.SIGINT) == handler._signal_handler

    handler.restore()
    assert signal.getsignal(signal.SIGINT) == previous
