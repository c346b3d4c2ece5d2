"""Harwell-Boeing files holding real, symmetric, assembled sparse matrices."""

from __future__ import annotations

from itertools import pairwise
from typing import Iterator

from mlgutil.base import IndexValueTriple
from mlgutil.matrix_file import MatrixReader, MatrixWriter

_MAX_LINE = 80
_FORMATS = "(16I5)          (16I5)          (10F7.1)            (10F7.1)"


def _tokens(lines: list[str]) -> list[str]:
    return [tok for line in lines for tok in line.split()]


def _to_float(tok: str) -> float:
    return float(tok.replace("D", "E").replace("d", "e"))


class BoeingReader(MatrixReader):
    """Reads an RSA or PSA Harwell-Boeing file entry by entry.

    The stored (upper or lower) triangle is returned first, column by column,
    then the same entries again with row and column swapped.
    """

    def __init__(self, filename) -> None:
        with open(filename) as f:
            lines = f.read().splitlines()
        if len(lines) < 4:
            raise ValueError("corrupt header in file")
        try:
            counts = lines[1].split()
            num_pointer_lines = int(counts[1])
            num_rowidx_lines = int(counts[2])
            num_value_lines = int(counts[3])
            num_rhs_lines = int(counts[4]) if len(counts) > 4 else 0
            fields = lines[2].split()
            matrix_type = fields[0]
            nrows, ncols, nnz = int(fields[1]), int(fields[2]), int(fields[3])
        except (IndexError, ValueError) as exc:
            raise ValueError("corrupt header in file") from exc

        if (
            len(matrix_type) < 3
            or matrix_type[0] not in "RrPp"
            or matrix_type[1] not in "Ss"
            or matrix_type[2] not in "Aa"
        ):
            raise ValueError("matrix should be real-valued, symmetric and sparse")

        super().__init__(sparse=True, nrows=nrows, ncols=ncols)
        self.nnz = nnz
        self.pointers_only = matrix_type[0] in "Pp"

        start = 4 + (1 if num_rhs_lines else 0)
        row_start = start + num_pointer_lines
        val_start = row_start + num_rowidx_lines
        if len(lines) < val_start:
            raise ValueError("corrupt file (header part is ok)")

        try:
            colptr = [int(t) for t in _tokens(lines[start:row_start])]
            rows = [int(t) for t in _tokens(lines[row_start:val_start])]
            values = (
                []
                if self.pointers_only
                else [_to_float(t) for t in _tokens(lines[val_start:val_start + num_value_lines])]
            )
        except ValueError as exc:
            raise ValueError("corrupt data section in file") from exc

        self._entries = self._collect(colptr, rows, values)
        self._pos = 0

    def _collect(
        self, colptr: list[int], rows: list[int], values: list[float]
    ) -> list[IndexValueTriple]:
        entries: list[IndexValueTriple] = []
        row_iter = iter(rows)
        value_iter = iter(values)
        for col, (lo, hi) in enumerate(pairwise(colptr)):
            for _ in range(hi - lo):
                if len(entries) >= self.nnz:
                    return entries
                try:
                    row = next(row_iter)
                    value = 1.0 if self.pointers_only else next(value_iter)
                except StopIteration as exc:
                    raise ValueError("end of file reached before all entries were read") from exc
                entries.append(IndexValueTriple(row - 1, col, value))
        return entries

    def rewind(self) -> None:
        self._pos = 0

    def read_triple(self) -> IndexValueTriple:
        """Return the next entry; EOFError once both sweeps are done."""
        n = len(self._entries)
        if self._pos >= 2 * n:
            raise EOFError("end of matrix file")
        entry = self._entries[self._pos % n]
        swapped = self._pos >= n
        self._pos += 1
        if swapped:
            return IndexValueTriple(entry.j, entry.i, entry.value)
        return IndexValueTriple(entry.i, entry.j, entry.value)

    def __iter__(self) -> Iterator[IndexValueTriple]:
        while True:
            try:
                yield self.read_triple()
            except EOFError:
                return


class _Section:
    """One data section of the file, wrapped into lines of limited width."""

    def __init__(self, initial: str = "") -> None:
        self.parts = [initial]
        self.chars = 0
        self.lines = 1

    def add(self, token: str, check_width: int, count_width: int) -> None:
        if self.chars + 1 + check_width > _MAX_LINE:
            self.parts.append("\n")
            self.chars = 0
            self.lines += 1
        self.parts.append(" " + token)
        self.chars += 1 + count_width

    def text(self) -> str:
        return "".join(self.parts)


class BoeingWriter(MatrixWriter):
    """Writes the upper triangle of a symmetric matrix as an RSA file.

    Entries must arrive column by column; entries below the diagonal are ignored.
    The file is written when the writer is closed.
    """

    def __init__(self, filename, nrows: int, ncols: int) -> None:
        super().__init__(sparse=True, nrows=nrows, ncols=ncols)
        self._filename = filename
        self._closed = False
        self.nnz = 0
        self._nnz_in_col = 0
        self._colptr_val = 1
        self._current_col = 0
        self._cols = _Section(str(self._colptr_val))
        self._rows = _Section()
        self._vals = _Section()

    def write_triple(self, triple: IndexValueTriple) -> None:
        if triple.i > triple.j:
            return
        if triple.j == self._current_col + 1:
            pointer = self._colptr_val + self._nnz_in_col
            self._current_col += 1
            self._colptr_val += self._nnz_in_col
            counted = len(str(self._colptr_val + self._nnz_in_col))
            self._cols.add(str(pointer), len(str(pointer)), counted)
            self._nnz_in_col = 0
        if triple.j != self._current_col:
            raise ValueError(
                f"matrix should be written column-wise: at column {self._current_col}, got {triple.j}"
            )
        self._nnz_in_col += 1
        self.nnz += 1
        row = str(triple.i + 1)
        self._rows.add(row, len(row), len(row))
        width = len(f"{triple.value:f}")
        self._vals.add(f"{triple.value:g}", width, width)

    def close(self) -> None:
        """Write the header and data sections to the file."""
        if self._closed:
            return
        self._closed = True
        cols = self._cols.text() + f" {self._colptr_val + self._nnz_in_col}\n"
        rows = self._rows.text() + "\n"
        vals = self._vals.text() + "\n"
        total = self._cols.lines + self._rows.lines + self._vals.lines
        header = (
            "Matrix" + "RSA_32".rjust(72) + "\n"
            + "".join(
                f"{x:>14}"
                for x in (total, self._cols.lines, self._rows.lines, self._vals.lines, 0)
            )
            + "\n"
            + "RSA" + f"{self.nrows:>25}" + f"{self.ncols:>14}" + f"{self.nnz:>14}" + f"{0:>14}" + "\n"
            + _FORMATS + "\n"
        )
        with open(self._filename, "w") as f:
            f.write(header + cols + rows + vals)