import os
import sys
import math
import pytest
import numpy as np

# Add the src directory to Python path to import local keyed_sparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from keyed_sparse import Sparse2DStore, OutOfBoundsError, InvalidArgumentError, orient_key
from test_utils import build_store, validate_dense


@pytest.fixture
def store() -> Sparse2DStore:
    """Store from the end-to-end example: (0,0)=1.0 and (1,2)=3.5."""
    return build_store({(0, 0): 1.0, (1, 2): 3.5})


class TestSparse2DStore_point_access:

    def test_empty_shape(self):
        assert Sparse2DStore().shape() == (0, 0)

    def test_shape_grows_with_set(self):
        s = Sparse2DStore()
        s.set(3, 5, 2.0)
        assert s.shape() == (4, 6)
        s.set(1, 1, 1.0)
        assert s.shape() == (4, 6)

    def test_end_to_end(self, store):
        assert store.shape() == (2, 3)
        assert store.get(1, 2) == 3.5
        assert store.get(0, 2) == 0.0
        with pytest.raises(OutOfBoundsError) as exc:
            store.get(5, 0)
        assert exc.value.axis == 0
        assert exc.value.size == 2
        assert exc.value.index == 5
        assert str(exc.value) == "index 5 is out of bounds for axis 0 with size 2"

    def test_out_of_bounds_column(self, store):
        with pytest.raises(OutOfBoundsError) as exc:
            store.get(0, 3)
        assert exc.value.axis == 1
        assert exc.value.size == 3

    def test_out_of_bounds_is_index_error(self, store):
        with pytest.raises(IndexError):
            store.get(2, 0)

    def test_unwritten_within_marks_is_zero(self, store):
        validate_dense(store, np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 3.5]]))

    def test_overwrite(self, store):
        store.set(1, 2, -1.0)
        assert store.get(1, 2) == -1.0
        assert len(store) == 2

    def test_fill_missing(self, store):
        assert store.get(0, 1, fill_missing=True) is None
        # no bounds check when filling
        assert store.get(100, 100, fill_missing=True) is None
        store.set(0, 1, 0.0)
        assert store.get(0, 1, fill_missing=True) == 0.0

    def test_stored_nan_is_present(self):
        s = Sparse2DStore()
        s.set(0, 0, float('nan'))
        v = s.get(0, 0, fill_missing=True)
        assert v is not None and math.isnan(v)

    def test_invalid_coordinates(self):
        s = Sparse2DStore()
        with pytest.raises(InvalidArgumentError):
            s.set(-1, 0, 1.0)
        with pytest.raises(InvalidArgumentError):
            s.set(0, 1.5, 1.0)
        with pytest.raises(InvalidArgumentError):
            s.set(True, 0, 1.0)
        with pytest.raises(InvalidArgumentError):
            s.set(0, 2**32, 1.0)
        assert s.shape() == (0, 0)

    def test_read_above_index_dtype(self, store):
        # reads are not limited by the index dtype, only writes are
        assert store.get(2**32, 0, fill_missing=True) is None
        with pytest.raises(OutOfBoundsError) as exc:
            store.get(2**32, 0)
        assert (exc.value.axis, exc.value.size) == (0, 2)

    def test_numpy_integer_coordinates(self):
        s = Sparse2DStore()
        s.set(np.uint32(2), np.int64(1), np.float32(0.5))
        assert s.get(2, 1) == 0.5
        assert isinstance(s.get(2, 1), float)

    def test_item_protocol(self, store):
        store[2, 0] = 4.0
        assert store[2, 0] == 4.0
        assert (2, 0) in store
        assert (2, 1) not in store
        assert 'x' not in store
        with pytest.raises(InvalidArgumentError):
            store[0] = 1.0
        with pytest.raises(InvalidArgumentError):
            store[0, 0, 0]


class TestSparse2DStore_transpose:

    def test_transpose_shape(self, store):
        store.transpose()
        assert store.shape() == (3, 2)

    def test_transpose_involution(self, store):
        before = sorted(store.items())
        store.transpose()
        store.transpose()
        assert store.shape() == (2, 3)
        assert sorted(store.items()) == before
        with pytest.raises(OutOfBoundsError):
            store.get(2, 0)

    def test_transpose_get(self, store):
        expected = {(r, c): store.get(r, c) for r in range(2) for c in range(3)}
        store.transpose()
        for (r, c), v in expected.items():
            assert store.get(c, r) == v

    def test_transpose_does_not_move_entries(self, store):
        data_store = dict(store.data_store)
        store.transpose()
        assert store.data_store == data_store
        assert (store.max_row, store.max_col) == (1, 2)

    def test_transposed_bounds(self, store):
        store.transpose()
        with pytest.raises(OutOfBoundsError) as exc:
            store.get(3, 0)
        assert (exc.value.axis, exc.value.size) == (0, 3)
        with pytest.raises(OutOfBoundsError) as exc:
            store.get(0, 2)
        assert (exc.value.axis, exc.value.size) == (1, 2)

    def test_set_while_transposed_uses_physical_marks(self):
        s = Sparse2DStore()
        s.transpose()
        s.set(4, 1, 2.0)
        # stored and tracked under (1, 4)
        assert s.data_store == {(1, 4): 2.0}
        assert (s.max_row, s.max_col) == (1, 4)
        assert s.shape() == (5, 2)
        s.transpose()
        assert s.shape() == (2, 5)
        assert s.get(1, 4) == 2.0
        assert s.get(0, 0) == 0.0
        with pytest.raises(OutOfBoundsError):
            s.get(4, 1)

    def test_keys_follow_orientation(self, store):
        store.transpose()
        assert sorted(store.keys()) == [(0, 0), (2, 1)]
        assert sorted(store) == [(0, 0), (2, 1)]
        assert (2, 1) in store
        assert (1, 2) not in store

    def test_orient_key(self):
        assert orient_key((1, 2), False) == (1, 2)
        assert orient_key((1, 2), True) == (2, 1)


class TestSparse2DStore_copy:

    def test_copy_is_independent(self, store):
        store.transpose()
        c = store.copy()
        assert c.shape() == store.shape()
        c.set(0, 5, 1.0)
        assert (0, 5) not in store
        assert store.shape() == (3, 2)

    def test_repr(self, store):
        assert repr(Sparse2DStore()) == "Sparse2DStore(shape=(0, 0), {})"
        assert repr(store) == "Sparse2DStore(shape=(2, 3), {(0, 0): 1.0, (1, 2): 3.5})"
