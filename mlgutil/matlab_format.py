"""MATLAB .mat files holding a single dense or sparse matrix."""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np
import scipy.io
import scipy.sparse

from mlgutil.base import CSCmatrix, IndexValueTriple
from mlgutil.matrix_file import MatrixReader


def _first_variable(filename):
    contents = scipy.io.loadmat(filename)
    for name, value in contents.items():
        if not name.startswith("__"):
            return value
    raise ValueError("no variables in file")


class MatlabDenseReader(MatrixReader):
    """Reads the first variable of a .mat file as a dense matrix, in row-major order."""

    def __init__(self, filename) -> None:
        var = _first_variable(filename)
        if scipy.sparse.issparse(var):
            var = var.toarray()
        arr = np.atleast_2d(np.asarray(var, dtype=float))
        nrows, ncols = arr.shape[0], arr.shape[1]
        super().__init__(sparse=False, nrows=nrows, ncols=ncols)
        self._values = arr.reshape(nrows, -1).ravel(order="C").tolist()
        self._pos = 0

    def rewind(self) -> None:
        self._pos = 0

    def read_value(self) -> float:
        """Return the next value; EOFError at the end."""
        if self._pos >= len(self._values):
            raise EOFError("end of matrix file")
        value = self._values[self._pos]
        self._pos += 1
        return value

    def __iter__(self) -> Iterator[float]:
        while True:
            try:
                yield self.read_value()
            except EOFError:
                return


class MatlabSparseReader(MatrixReader):
    """Reads the first variable of a .mat file as a sparse matrix, column by column.

    Reading stops at the first stored entry whose value is zero.
    """

    def __init__(self, filename) -> None:
        var = _first_variable(filename)
        if not scipy.sparse.issparse(var):
            raise ValueError("first variable is not a sparse matrix")
        m = scipy.sparse.csc_matrix(var)
        super().__init__(sparse=True, nrows=m.shape[0], ncols=m.shape[1])
        self._entries: list[IndexValueTriple] = []
        for col, (lo, hi) in enumerate(zip(m.indptr[:-1], m.indptr[1:])):
            for k in range(lo, hi):
                value = float(m.data[k])
                if value == 0:
                    break
                self._entries.append(IndexValueTriple(int(m.indices[k]), col, value))
            else:
                continue
            break
        self._pos = 0

    def rewind(self) -> None:
        self._pos = 0

    def read_triple(self) -> IndexValueTriple:
        """Return the next entry; EOFError at the end."""
        if self._pos >= len(self._entries):
            raise EOFError("end of matrix file")
        e = self._entries[self._pos]
        self._pos += 1
        return IndexValueTriple(e.i, e.j, e.value)

    def __iter__(self) -> Iterator[IndexValueTriple]:
        while True:
            try:
                yield self.read_triple()
            except EOFError:
                return


def write_matlab_dense(filename, nrows: int, ncols: int, values: Sequence[float]) -> None:
    """Save values, given in column-major order, as the variable M_dense."""
    arr = np.asarray(values, dtype=float).reshape((nrows, ncols), order="F")
    scipy.io.savemat(filename, {"M_dense": arr})


def write_matlab_sparse(filename, csc: CSCmatrix) -> None:
    """Save a compressed sparse column matrix as the variable M_sparse."""
    m = scipy.sparse.csc_matrix(
        (
            np.asarray(csc.val[: csc.nnz], dtype=float),
            np.asarray(csc.ir[: csc.nnz], dtype=np.int64),
            np.asarray(csc.jc[: csc.ncols + 1], dtype=np.int64),
        ),
        shape=(csc.nrows, csc.ncols),
    )
    scipy.io.savemat(filename, {"M_sparse": m})