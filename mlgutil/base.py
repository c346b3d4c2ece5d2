"""Small value types shared across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, TypeVar

T = TypeVar("T")


def _fmt(x: object) -> str:
    """Format a number the way a default-precision stream would."""
    if isinstance(x, float):
        return f"{x:g}"
    return str(x)


@dataclass
class IndexValuePair:
    """An index together with a value."""

    i: int = 0
    value: float = 0.0

    def __str__(self) -> str:
        return f"({self.i},{_fmt(self.value)})"


@dataclass
class IndexValueTriple:
    """A (row, column, value) entry of a matrix."""

    i: int = 0
    j: int = 0
    value: float = 0.0

    def __str__(self) -> str:
        return f"({self.i},{self.j},{_fmt(self.value)})"


@dataclass
class BlockIndexPair:
    """A position given as a block number and an index inside the block."""

    block: int = -1
    index: int = -1

    def __str__(self) -> str:
        return f"({self.block},{self.index})"


@dataclass
class SVpair:
    """A sparse-vector entry: an index and its value."""

    first: int = 0
    second: float = 0.0

    def __str__(self) -> str:
        return f"({self.first},{_fmt(self.second)})"


@dataclass
class IndexSet:
    """A fixed-size collection of indices."""

    ix: list[int] = field(default_factory=list)

    @property
    def k(self) -> int:
        return len(self.ix)

    def __len__(self) -> int:
        return len(self.ix)

    def __getitem__(self, i: int) -> int:
        return self.ix[i]

    def __setitem__(self, i: int, value: int) -> None:
        self.ix[i] = value

    def __iter__(self) -> Iterator[int]:
        return iter(self.ix)

    def sort(self) -> None:
        """Sort the indices in place, in increasing order."""
        self.ix.sort()

    def __str__(self) -> str:
        return "(" + ",".join(str(x) for x in self.ix) + ")"


@dataclass
class CSCmatrix:
    """A sparse matrix in compressed sparse column form."""

    ir: list[int]
    jc: list[int]
    val: list[float]
    nnz: int
    nrows: int
    ncols: int


def squared(v: T) -> T:
    """Return v multiplied by itself."""
    return v * v