"""Signal-aware output writing for the treeconcat CLI."""

import errno
import os
from pathlib import Path
from types import TracebackType
from typing import IO, Iterable, Optional, Type, Union

from treeconcat.cli.signal_handler import signal_handler
from treeconcat.types import PathType


class SafeWriter:
    """Line output to stdout or a file that stops cleanly when the reader goes away.

    Output is encoded as UTF-8 and written straight to a file descriptor. Before
    each write the process-wide signal handler is consulted; once SIGPIPE or SIGINT
    has been seen, or the operating system reports EPIPE, writes raise
    BrokenPipeError so the caller can stop producing lines.

    Attributes:
        target: The descriptor or path the writer was created for.
        fd: The descriptor written to.

    Example:
        >>> import sys
        >>> with SafeWriter(sys.stdout.fileno()) as out:  # doctest: +SKIP
        ...     out.write_lines(["proj", "└─ a.ts"])
    """

    def __init__(self, target: Union[int, PathType]) -> None:
        """Open the writer.

        Args:
            target: An open file descriptor, which is left open on close, or a path,
                which is created or truncated and closed again on close.

        Raises:
            TypeError: If target is neither a descriptor nor a path.
        """
        self.target = target
        self._owned_file: Optional[IO[str]] = None
        self._closed = False

        if isinstance(target, int):
            self.fd = target
        elif isinstance(target, (str, os.PathLike)):
            self._owned_file = Path(target).open("w", encoding="utf-8")
            self.fd = self._owned_file.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(target).__name__}")

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> None:
        """Write text as-is.

        Raises:
            ValueError: If the writer was closed.
            BrokenPipeError: If output was interrupted or the pipe is gone.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")
        if signal_handler.interrupted:
            raise BrokenPipeError()

        payload = text.encode("utf-8")
        try:
            os.write(self.fd, payload)
        except OSError as exc:
            if exc.errno == errno.EPIPE:
                raise BrokenPipeError() from exc
            raise

    def write_lines(self, lines: Iterable[str]) -> None:
        """Write each line followed by a newline, stopping at the first interruption."""
        for line in lines:
            self.write(line + "\n")

    def close(self) -> None:
        """Close the file opened by this writer, if any. Closing twice is harmless."""
        if self._closed:
            return
        self._closed = True

        owned, self._owned_file = self._owned_file, None
        if owned is None:
            return
        try:
            owned.close()
        except OSError as exc:
            if exc.errno != errno.EPIPE:
                raise

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        # An error raised inside the with block takes precedence over one from close()
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
