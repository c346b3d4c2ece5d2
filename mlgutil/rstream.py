"""An indenting text stream for printing nested objects."""

from __future__ import annotations

from typing import Any, TextIO


def _fmt(x: Any) -> str:
    if isinstance(x, float):
        return f"{x:g}"
    return str(x)


class Rstream:
    """Writes to a text stream, indenting each line by the current nesting level."""

    def __init__(self, out: TextIO, depth: int = 16) -> None:
        self.out = out
        self.indent = 0
        self.depth = depth
        self.bol = True

    def _start_line(self) -> None:
        if self.bol:
            self.out.write("  " * self.indent)
            self.bol = False

    def write(self, x: Any) -> "Rstream":
        """Write a value, indenting first if at the start of a line."""
        self._start_line()
        self.out.write(_fmt(x))
        return self

    def endl(self) -> "Rstream":
        """End the current line."""
        self.out.write("\n")
        self.bol = True
        return self

    def write_object(self, x: Any) -> "Rstream":
        """Let x describe itself through serialize(), one level deeper."""
        if self.depth < 0:
            return self.endl()
        self.indent += 1
        self.depth -= 1
        try:
            x.serialize(self)
        finally:
            self.indent -= 1
            self.depth += 1
        return self

    def var(self, name: str, x: Any) -> "Rstream":
        """Write a name=value line."""
        self._start_line()
        self.out.write(f"  {name}={_fmt(x)}\n")
        self.bol = True
        return self

    def close(self) -> None:
        """Finish the output with a newline."""
        self.out.write("\n")

    def __enter__(self) -> "Rstream":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()