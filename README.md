# mlgutil

Supporting pieces for numerical code that works with sparse and dense
matrices:

- `mlgutil.base`: small value types: `IndexValuePair`, `IndexValueTriple`
  (a `(i, j, value)` matrix entry), `BlockIndexPair`, `SVpair`, `IndexSet`,
  `CSCmatrix` (compressed sparse column data), and `squared(v)`.
- `mlgutil.binio`: `BinaryReader` and `BinaryWriter` for a little-endian
  binary format of ints, doubles, booleans, vectors, maps, packed arrays and
  name/version tags. `Serializable` is an abstract base for objects that
  write themselves with `serialize(writer)` and can `save(filename)`.
  A mismatched tag or version raises `FormatError`.
- Matrix files behind a shared `MatrixReader` / `MatrixWriter` interface
  (`mlgutil.matrix_file`). Using a dense file as sparse, or the other way
  round, raises `UnsupportedOperation`.
  - `mlgutil.ascii_format`: `DenseAsciiReader`, `DenseAsciiWriter` (one row
    per line) and `SparseAsciiReader`, `SparseAsciiWriter` (`i j value`
    lines; the reader also accepts a leading `nrows ncols` line).
  - `mlgutil.boeing_format`: `BoeingReader` for real or pattern, symmetric,
    assembled Harwell-Boeing files (RSA/PSA), and `BoeingWriter`, which
    takes entries column by column, keeps the upper triangle and writes an
    RSA file when closed. The reader returns the stored triangle first and
    then the same entries with row and column swapped.
  - `mlgutil.matlab_format`: `MatlabDenseReader` and `MatlabSparseReader`
    read the first variable of a `.mat` file; `write_matlab_dense` saves
    column-major values as `M_dense`, `write_matlab_sparse` saves a
    `CSCmatrix` as `M_sparse`.
- `mlgutil.log.Log`: verbosity-filtered messages stamped with the seconds
  elapsed since `start_clock()`, written to stdout or a given stream.
- `mlgutil.rstream.Rstream`: indented text output of nested objects that
  describe themselves through `serialize(rstream)`.
- `mlgutil.threads`: `ThreadManager` grants a global number of thread slots;
  each `ThreadBank` runs functions on threads within its own limit and a
  number of privileged slots that do not count against the global one.

Readers signal the end of a file by raising `EOFError` from `read_value` /
`read_triple`; iterating over a reader stops there instead.

## Installation

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Examples

Write and read a sparse text matrix:

```python
from mlgutil.base import IndexValueTriple
from mlgutil.ascii_format import SparseAsciiWriter, SparseAsciiReader

with SparseAsciiWriter("m.txt", 3, 3) as out:
    out.write_triple(IndexValueTriple(0, 1, 2.5))
    out.write_triple(IndexValueTriple(2, 2, 1.0))

with SparseAsciiReader("m.txt") as reader:
    print(reader.nrows, reader.ncols)   # 3 3
    for triple in reader:
        print(triple)                   # (0,1,2.5) then (2,2,1)
```

Write a symmetric matrix as a Harwell-Boeing file:

```python
from mlgutil.base import IndexValueTriple
from mlgutil.boeing_format import BoeingWriter, BoeingReader

with BoeingWriter("m.rsa", 2, 2) as out:
    out.write_triple(IndexValueTriple(0, 0, 4.0))
    out.write_triple(IndexValueTriple(0, 1, 1.0))
    out.write_triple(IndexValueTriple(1, 1, 3.0))

entries = list(BoeingReader("m.rsa"))
```

Binary round trip:

```python
from mlgutil.binio import BinaryWriter, BinaryReader

with BinaryWriter("data.bin") as w:
    w.tag("Example", 1)
    w.write_vector([1, 2, 3], w.write_int)

with BinaryReader("data.bin") as r:
    r.check("Example", 1)
    values = r.read_vector(r.read_int)   # [1, 2, 3]
```

Run work on a bounded number of threads:

```python
from mlgutil.threads import ThreadManager, ThreadBank

manager = ThreadManager(4)
results = []
with ThreadBank(manager, maxthreads=2) as bank:
    for n in range(10):
        bank.add(results.append, n * n)
```

## What it does not do

The package has no command-line program and does not build graphs or
compute kernels over them. It supplies the file formats, serialization,
logging and threading pieces such code relies on.