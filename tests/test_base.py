from mlgutil.base import (
    BlockIndexPair,
    CSCmatrix,
    IndexSet,
    IndexValuePair,
    IndexValueTriple,
    SVpair,
    squared,
)


def test_index_value_triple_str():
    assert str(IndexValueTriple(1, 2, 0.5)) == "(1,2,0.5)"


def test_index_value_pair_defaults_and_str_shape():
    p = IndexValuePair()
    assert p.i == 0 and p.value == 0
    s = str(IndexValuePair(7, 2.5))
    assert s.startswith("(7,") and s.endswith(")")
    assert "2.5" in s


def test_block_index_pair_defaults():
    p = BlockIndexPair()
    assert (p.block, p.index) == (-1, -1)
    assert str(p) == "(-1,-1)"


def test_block_index_pair_str_contains_fields():
    assert str(BlockIndexPair(4, 9)).split(",") == ["(4", "9)"]


def test_svpair_str_contains_fields():
    s = str(SVpair(3, 1.25))
    assert s.strip("()").split(",") == ["3", "1.25"]


def test_index_set_sort_and_str():
    s = IndexSet([3, 1, 2])
    s.sort()
    assert list(s) == sorted([3, 1, 2])
    assert str(s) == "(1,2,3)"
    assert s.k == 3


def test_index_set_item_access():
    s = IndexSet([0, 0])
    s[1] = 5
    assert s[1] == 5
    assert len(s) == 2


def test_csc_matrix_holds_fields():
    m = CSCmatrix(ir=[0, 1], jc=[0, 1, 2], val=[1.0, 2.0], nnz=2, nrows=2, ncols=2)
    assert m.jc[-1] == m.nnz
    assert m.val == [1.0, 2.0]


def test_squared():
    assert squared(3) == 9
    assert squared(-2.0) == squared(2.0)