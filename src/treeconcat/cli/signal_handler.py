"""Signal handling for the treeconcat CLI.

SIGPIPE (the reader of our output went away, e.g. `treeconcat . | head`) and
SIGINT (Ctrl+C) are recorded rather than acted on immediately, so output can stop
at a clean point and main() can exit with the conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional


class SignalHandler:
    """Turns SIGPIPE and SIGINT into events that output code can poll.

    Each handler fires once: it sets its event and puts the previously installed
    handler back, so a second Ctrl+C interrupts as usual.

    Attributes:
        sigpipe_received: Set once SIGPIPE arrived.
        sigint_received: Set once SIGINT arrived.
        original_sigpipe_handler: Handler that was active before setup.
        original_sigint_handler: Handler that was active before setup.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler = signal.getsignal(signal.SIGPIPE)
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    @property
    def interrupted(self) -> bool:
        """True once either signal arrived."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    @staticmethod
    def _record(event: Event, signum: int, previous: Any) -> None:
        event.set()
        signal.signal(signum, previous)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self._record(self.sigpipe_received, signal.SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self._record(self.sigint_received, signal.SIGINT, self.original_sigint_handler)


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Route SIGPIPE and SIGINT to the process-wide handler."""
    for signum, handler in (
        (signal.SIGPIPE, signal_handler.handle_sigpipe),
        (signal.SIGINT, signal_handler.handle_sigint),
    ):
        signal.signal(signum, handler)


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    The interpreter flushes stdout on shutdown; with the reader gone that flush
    would otherwise report a broken pipe.
    """
    if not signal_handler.interrupted:
        return
    null_fd = os.open(os.devnull, os.O_WRONLY)
    os.dup2(null_fd, sys.stdout.fileno())


atexit.register(cleanup)
