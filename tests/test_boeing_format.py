import pytest

from mlgutil.base import IndexValueTriple
from mlgutil.boeing_format import BoeingReader, BoeingWriter

HAND_MADE = (
    "Title\n"
    "             3             1             1             1\n"
    "RSA                          3             3             4             0\n"
    "(16I5)          (16I5)          (10F7.1)            (10F7.1)\n"
    "1 2 4 5\n"
    "1 1 2 3\n"
    "2.0 1.0 3.0 4.0\n"
)

STORED = [(0, 0, 2.0), (0, 1, 1.0), (1, 1, 3.0), (2, 2, 4.0)]


def _triples(reader):
    return [(t.i, t.j, t.value) for t in reader]


def _write(path, entries, nrows, ncols):
    with BoeingWriter(path, nrows, ncols) as w:
        for i, j, v in entries:
            w.write_triple(IndexValueTriple(i, j, v))


def test_read_hand_made_file(tmp_path):
    path = tmp_path / "m.rsa"
    path.write_text(HAND_MADE)
    r = BoeingReader(path)
    assert (r.nrows, r.ncols, r.nnz) == (3, 3, 4)
    swapped = [(j, i, v) for i, j, v in STORED]
    assert _triples(r) == STORED + swapped


def test_end_of_file_raises(tmp_path):
    path = tmp_path / "m.rsa"
    path.write_text(HAND_MADE)
    r = BoeingReader(path)
    list(r)
    with pytest.raises(EOFError):
        r.read_triple()


def test_rhs_header_line_is_skipped(tmp_path):
    lines = HAND_MADE.splitlines(keepends=True)
    lines[1] = "             4             1             1             1             1\n"
    lines.insert(4, "F             1\n")
    path = tmp_path / "m.rsa"
    path.write_text("".join(lines))
    assert _triples(BoeingReader(path))[:4] == STORED


def test_pattern_matrix_has_unit_values(tmp_path):
    text = HAND_MADE.replace("RSA", "PSA").replace("2.0 1.0 3.0 4.0\n", "")
    text = text.replace("             3             1             1             1",
                        "             2             1             1             0")
    path = tmp_path / "m.psa"
    path.write_text(text)
    r = BoeingReader(path)
    assert r.pointers_only
    assert [t.value for t in r] == [1.0] * 8


def test_unsymmetric_matrix_rejected(tmp_path):
    path = tmp_path / "m.rua"
    path.write_text(HAND_MADE.replace("RSA", "RUA"))
    with pytest.raises(ValueError):
        BoeingReader(path)


def test_corrupt_header_rejected(tmp_path):
    path = tmp_path / "bad.rsa"
    path.write_text("Title\nnot numbers\n")
    with pytest.raises(ValueError):
        BoeingReader(path)


def test_write_header(tmp_path):
    path = tmp_path / "out.rsa"
    writer = BoeingWriter(path, 3, 3)
    for i, j, v in STORED:
        writer.write_triple(IndexValueTriple(i, j, v))
    writer.close()
    lines = path.read_text().splitlines()
    assert lines[0].startswith("Matrix") and lines[0].endswith("RSA_32")
    assert len(lines[0]) == 78
    assert lines[2].split()[:4] == ["RSA", "3", "3", "4"]
    assert lines[3] == "(16I5)          (16I5)          (10F7.1)            (10F7.1)"


def test_round_trip(tmp_path):
    path = tmp_path / "out.rsa"
    _write(path, STORED, 3, 3)
    r = BoeingReader(path)
    assert (r.nrows, r.ncols, r.nnz) == (3, 3, 4)
    assert _triples(r)[:4] == STORED


def test_lower_triangle_is_ignored(tmp_path):
    path = tmp_path / "out.rsa"
    entries = [(0, 0, 2.0), (1, 0, 9.0), (0, 1, 1.0), (1, 1, 3.0), (2, 1, 9.0), (2, 2, 4.0)]
    _write(path, entries, 3, 3)
    assert _triples(BoeingReader(path))[:4] == STORED


def test_non_column_order_rejected(tmp_path):
    w = BoeingWriter(tmp_path / "out.rsa", 3, 3)
    w.write_triple(IndexValueTriple(0, 0, 1.0))
    with pytest.raises(ValueError):
        w.write_triple(IndexValueTriple(0, 2, 1.0))


def test_long_sections_wrap_and_round_trip(tmp_path):
    n = 150
    entries = [(k, k, float(k) + 0.5) for k in range(n)]
    path = tmp_path / "diag.rsa"
    _write(path, entries, n, n)
    lines = path.read_text().splitlines()
    counts = [int(x) for x in lines[1].split()]
    assert counts[1] > 1 and counts[2] > 1 and counts[3] > 1
    assert len(lines) == 4 + counts[0]
    assert counts[0] == counts[1] + counts[2] + counts[3]
    r = BoeingReader(path)
    assert _triples(r)[:n] == entries