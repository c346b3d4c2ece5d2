"""Base classes for matrix files read or written one entry at a time."""

from __future__ import annotations

from typing import IO, Any, Optional

from mlgutil.base import IndexValueTriple


class UnsupportedOperation(Exception):
    """Raised when a dense file is used as sparse, or the other way round."""


class _MatrixFile:
    def __init__(
        self,
        file: Optional[IO] = None,
        *,
        sparse: bool = False,
        nrows: int = 0,
        ncols: int = 0,
    ) -> None:
        self._file = file
        self.sparse = sparse
        self.nrows = nrows
        self.ncols = ncols

    def _close_file(self) -> None:
        if self._file is not None:
            self._file.close()


class MatrixReader(_MatrixFile):
    """A matrix input file; subclasses read values (dense) or triples (sparse)."""

    def rewind(self) -> None:
        """Return to the first entry."""

    def read_value(self) -> float:
        """Return the next value of a dense file."""
        raise UnsupportedOperation("read_value is not supported by sparse matrix input files")

    def read_triple(self) -> IndexValueTriple:
        """Return the next (i, j, value) entry."""
        raise UnsupportedOperation("read_triple is not supported by dense matrix input files")

    def close(self) -> None:
        """Close the underlying file, if any."""
        self._close_file()

    def __enter__(self) -> "MatrixReader":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class MatrixWriter(_MatrixFile):
    """A matrix output file; subclasses write values (dense) or triples (sparse)."""

    def write_value(self, value: float) -> None:
        """Write the next value of a dense file."""
        raise UnsupportedOperation("write_value is not supported by sparse matrix output files")

    def write_triple(self, triple: IndexValueTriple) -> None:
        """Write an (i, j, value) entry."""
        raise UnsupportedOperation("write_triple is not supported by dense matrix output files")

    def close(self) -> None:
        """Close the underlying file, if any."""
        self._close_file()

    def __enter__(self) -> "MatrixWriter":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()