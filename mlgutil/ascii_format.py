"""Plain-text matrix files: dense (one row per line) and sparse (i j value lines)."""

from __future__ import annotations

from typing import Iterator

from mlgutil.base import IndexValueTriple
from mlgutil.matrix_file import MatrixReader, MatrixWriter


def _fmt(x: float) -> str:
    return f"{x:g}"


def _read_lines(filename) -> list[str]:
    with open(filename) as f:
        return f.read().splitlines()


class DenseAsciiReader(MatrixReader):
    """Reads a whitespace-separated dense matrix, one row per line."""

    def __init__(self, filename) -> None:
        lines = _read_lines(filename)
        ncols = len(lines[0].split()) if lines else 0
        self._values = [float(tok) for line in lines for tok in line.split()]
        nrows = -(-len(self._values) // ncols) if ncols else 0
        super().__init__(sparse=False, nrows=nrows, ncols=ncols)
        self._pos = 0

    def rewind(self) -> None:
        self._pos = 0

    def read_value(self) -> float:
        """Return the next value in row-major order; EOFError at the end."""
        return self.read_triple().value

    def read_triple(self) -> IndexValueTriple:
        """Return the next entry with its row and column; EOFError at the end."""
        if self._pos >= len(self._values):
            raise EOFError("end of matrix file")
        i, j = divmod(self._pos, self.ncols)
        value = self._values[self._pos]
        self._pos += 1
        return IndexValueTriple(i, j, value)

    def __iter__(self) -> Iterator[IndexValueTriple]:
        while True:
            try:
                yield self.read_triple()
            except EOFError:
                return


class SparseAsciiReader(MatrixReader):
    """Reads 'i j value' lines, optionally preceded by an 'nrows ncols' header."""

    def __init__(self, filename) -> None:
        lines = _read_lines(filename)
        first = lines[0].split() if lines else []
        tokens = [tok for line in lines for tok in line.split()]
        if len(first) == 2:
            nrows, ncols = int(first[0]), int(first[1])
            body = tokens[2:]
        elif len(first) == 3:
            body = tokens
            nrows = ncols = 0
        else:
            raise ValueError("could not parse first line")
        if len(body) % 3:
            raise ValueError("incomplete entry at end of sparse matrix file")
        self._entries = [
            IndexValueTriple(int(body[n]), int(body[n + 1]), float(body[n + 2]))
            for n in range(0, len(body), 3)
        ]
        if len(first) == 3:
            nrows = max(e.i for e in self._entries) + 1
            ncols = max(e.j for e in self._entries) + 1
        super().__init__(sparse=True, nrows=nrows, ncols=ncols)
        self._pos = 0

    def rewind(self) -> None:
        self._pos = 0

    def read_triple(self) -> IndexValueTriple:
        """Return the next entry; EOFError at the end."""
        if self._pos >= len(self._entries):
            raise EOFError("end of matrix file")
        entry = self._entries[self._pos]
        self._pos += 1
        return IndexValueTriple(entry.i, entry.j, entry.value)

    def __iter__(self) -> Iterator[IndexValueTriple]:
        while True:
            try:
                yield self.read_triple()
            except EOFError:
                return


class DenseAsciiWriter(MatrixWriter):
    """Writes a dense matrix value by value, ncols values per line."""

    def __init__(self, filename, nrows: int, ncols: int) -> None:
        super().__init__(open(filename, "w"), sparse=False, nrows=nrows, ncols=ncols)
        self.i = 0
        self.j = 0

    def write_value(self, value: float) -> None:
        self._file.write(_fmt(value))
        self.i += 1
        if self.i < self.ncols:
            self._file.write(" ")
        else:
            self._file.write("\n")
            self.i = 0
            self.j += 1


class SparseAsciiWriter(MatrixWriter):
    """Writes a sparse matrix as 'i j value' lines."""

    def __init__(self, filename, nrows: int, ncols: int) -> None:
        super().__init__(open(filename, "w"), sparse=True, nrows=nrows, ncols=ncols)

    def write_triple(self, triple: IndexValueTriple) -> None:
        self._file.write(f"{triple.i} {triple.j} {_fmt(triple.value)}\n")