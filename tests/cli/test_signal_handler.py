"""Unit tests for the signal handler module in the treeconcat CLI."""

import os
import signal
from unittest.mock import MagicMock, patch

import pytest

from treeconcat.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler


@pytest.fixture
def mock_signal():
    """Create a mock for signal.signal."""
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def mock_os():
    """Create a mock for the os functions used by cleanup."""
    with patch("treeconcat.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123
        mock.dup2 = MagicMock()
        mock.devnull = "/dev/null"
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """Create a SignalHandler that does not share state with the singleton."""
    return SignalHandler()


@pytest.fixture
def interrupted_singleton():
    """Mark the singleton as interrupted by SIGPIPE and reset it afterwards."""
    signal_handler.sigpipe_received.set()
    yield signal_handler
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()


def test_signal_handler_initialization():
    """Test SignalHandler remembers the original handlers."""
    with patch("signal.getsignal", return_value=signal.SIG_DFL) as mock_getsignal:
        handler = SignalHandler()

    mock_getsignal.assert_any_call(signal.SIGPIPE)
    mock_getsignal.assert_any_call(signal.SIGINT)
    assert handler.original_sigpipe_handler is signal.SIG_DFL
    assert not handler.sigpipe_received.is_set()
    assert not handler.sigint_received.is_set()
    assert not handler.interrupted


def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    """Test the SIGPIPE handler records the signal and restores the original handler."""
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, None)

    assert fresh_signal_handler.sigpipe_received.is_set()
    assert fresh_signal_handler.interrupted
    mock_signal.assert_called_once_with(signal.SIGPIPE, fresh_signal_handler.original_sigpipe_handler)


def test_handle_sigint(fresh_signal_handler, mock_signal):
    """Test the SIGINT handler records the signal and restores the original handler."""
    fresh_signal_handler.handle_sigint(signal.SIGINT, None)

    assert fresh_signal_handler.sigint_received.is_set()
    assert fresh_signal_handler.interrupted
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)


def test_setup_signal_handling(mock_signal):
    """Test both handlers of the singleton are installed."""
    setup_signal_handling()

    assert mock_signal.call_count == 2
    mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)


def test_cleanup_with_no_signals(mock_os):
    """Test cleanup leaves stdout alone when nothing was received."""
    assert not signal_handler.interrupted

    cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


def test_cleanup_after_interruption(mock_os, interrupted_singleton):
    """Test cleanup redirects stdout to the null device after an interruption."""
    with patch("sys.stdout") as mock_stdout:
        mock_stdout.fileno.return_value = 1
        cleanup()

    mock_os.open.assert_called_once_with("/dev/null", os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)
