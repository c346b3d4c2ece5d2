"""A timestamped, verbosity-filtered logger."""

from __future__ import annotations

import sys
import threading
import time
from typing import Any, Optional, TextIO

_OUTPUT_LOCK = threading.Lock()


def _fmt(x: Any) -> str:
    if isinstance(x, float):
        return f"{x:.5f}"
    return str(x)


class Log:
    """Writes messages to stdout, or to a given text stream, with elapsed times."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream
        self.verbosity = 0
        self.skippedlines = 0
        self._t = time.perf_counter()

    def _emit(self, text: str) -> None:
        with _OUTPUT_LOCK:
            out = sys.stdout if self.stream is None else self.stream
            out.write(text + "\n")
            if self.stream is None:
                out.flush()
            self.skippedlines = 0

    def write(self, s: str) -> "Log":
        """Write a line as it is, without a timestamp."""
        self._emit(str(s))
        return self

    def message(self, s: str) -> "Log":
        """Write a line, prefixed with the elapsed time when writing to stdout."""
        if self.stream is None:
            self._emit(f"{self.clock():.5f}s: {s}")
        else:
            self._emit(str(s))
        return self

    def log(self, v: int, *args: Any) -> "Log":
        """Write a timestamped line built from args if verbosity is at least v."""
        if self.verbosity < v:
            return self
        now = self.clock()
        if (
            len(args) == 2
            and isinstance(args[0], int)
            and not isinstance(args[0], bool)
            and isinstance(args[1], float)
        ):
            self._emit(f"{now:.5f} {args[0]} {args[1]:.5f} ")
        else:
            self._emit(f"{now:.5f}s: " + "".join(_fmt(a) for a in args))
        return self

    def skip(self, v: int = 0, n: int = 1) -> "Log":
        """Make sure at least n blank lines separate the last message from the next."""
        if self.verbosity < v or self.skippedlines >= n:
            return self
        with _OUTPUT_LOCK:
            out = sys.stdout if self.stream is None else self.stream
            out.write("\n" * (n - self.skippedlines))
            self.skippedlines = n
        return self

    def start_clock(self) -> None:
        """Restart the clock that timestamps are measured from."""
        self._t = time.perf_counter()

    def clock(self) -> float:
        """Return the seconds elapsed since the clock was started."""
        return time.perf_counter() - self._t