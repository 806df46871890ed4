import numpy as np
import pandas as pd
from scipy.sparse import coo_matrix

from .sparse_matrix import Sparse2DStore, as_coordinate
from .range_resolver import AxisRange, AxisSpec, resolve_key
from .sparse_errors import DimensionalityError, InvalidArgumentError, ShapeMismatchError
from .constants import FrameColumn, MISSING


def check_array_ndim(ndim: int, **arrays: np.ndarray) -> None:
    """
    Check that every named array has exactly ndim dimensions.

    Raises:
        DimensionalityError: For the first array with a different number of dimensions
    """
    for name, array in arrays.items():
        if array.ndim != ndim:
            raise DimensionalityError(name, ndim, array.ndim)


def check_ndarray_shape(**arrays: np.ndarray) -> None:
    """
    Check that every named array has the same shape as the first one.

    Raises:
        ShapeMismatchError: Naming the first array and the first one that differs from it
    """
    names = list(arrays.keys())
    first = arrays[names[0]]
    for name in names[1:]:
        if arrays[name].shape != first.shape:
            raise ShapeMismatchError(
                f"{names[0]}, {name} could not be broadcast together with shapes {first.shape} {arrays[name].shape}",
                shapes=(first.shape, arrays[name].shape))


def _check_coordinates(name: str, coords: np.ndarray, max_index: int) -> None:
    if coords.size == 0:
        return
    if coords.dtype.kind not in 'iu':
        raise InvalidArgumentError(f"{name} must hold integer coordinates, got dtype {coords.dtype}")
    if coords.min() < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {coords.min()}")
    if coords.max() > max_index:
        raise InvalidArgumentError(f"{name} {coords.max()} exceeds the largest supported index {max_index}")


def _check_range(name: str, axis: AxisRange, max_index: int) -> None:
    # slices are clamped to the shape, so only a single index can fall outside the index dtype
    if axis.length > 0:
        as_coordinate(axis.indices()[-1], name, max_index)
        as_coordinate(axis.start, name, max_index)


def bulk_ingest(store: Sparse2DStore, rows, cols, values) -> None:
    """
    Write a batch of (row, col, value) triplets into the store.

    The three inputs are validated together before anything is written. Triplets
    are then applied in input order, so a repeated coordinate keeps the value of
    its last occurrence.

    Args:
        store: The store to write into
        rows: 1D array of row indices
        cols: 1D array of column indices
        values: 1D array of values
    """
    i = np.asarray(rows)
    j = np.asarray(cols)
    x = np.asarray(values, dtype=np.float64)
    check_array_ndim(1, i=i, j=j, x=x)
    check_ndarray_shape(i=i, j=j, x=x)
    _check_coordinates('i', i, store.max_index)
    _check_coordinates('j', j, store.max_index)

    for r, c, v in zip(i.tolist(), j.tolist(), x.tolist()):
        store.set(r, c, v)


def dense_read(store: Sparse2DStore, row_spec: AxisSpec, col_spec: AxisSpec, dtype: str = 'float64') -> np.ndarray:
    """
    Read a dense 2D block from the store.

    Every cell of the resolved grid is read with store.get, so absent cells
    read as 0.0 and a single index beyond the known extent raises
    OutOfBoundsError.
    """
    row_range, col_range = resolve_key((row_spec, col_spec), store.shape())
    block = np.zeros((row_range.length, col_range.length), dtype=dtype)
    for ix, r in enumerate(row_range.indices()):
        for jx, c in enumerate(col_range.indices()):
            block[ix, jx] = store.get(r, c)
    return block


def dense_write(store: Sparse2DStore, row_spec: AxisSpec, col_spec: AxisSpec, block) -> None:
    """
    Write a dense 2D block into the store.

    The block must have exactly the shape of the resolved grid; it is not
    broadcast. Every cell of the block is stored, zeros included.
    """
    row_range, col_range = resolve_key((row_spec, col_spec), store.shape())
    x = np.asarray(block, dtype=np.float64)
    check_array_ndim(2, x=x)
    if x.shape != (row_range.length, col_range.length):
        raise ShapeMismatchError(
            f"could not broadcast input array from shape {x.shape} into shape ({row_range.length}, {col_range.length})",
            shapes=(x.shape, (row_range.length, col_range.length)))
    _check_range('row', row_range, store.max_index)
    _check_range('col', col_range, store.max_index)

    for ix, r in enumerate(row_range.indices()):
        for jx, c in enumerate(col_range.indices()):
            store.set(r, c, x[ix, jx])


def sparse_read(store: Sparse2DStore, row_spec: AxisSpec, col_spec: AxisSpec,
                index_dtype: str = 'uint32', value_dtype: str = 'float64') -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Read the stored entries inside a window of the store.

    Args:
        store: The store to read from
        row_spec: Row index or slice of the window
        col_spec: Column index or slice of the window

    Returns:
        (rows, cols, values) parallel arrays, in row-major order over the window.
        Cells that were never written are omitted; explicitly stored zeros are kept.
    """
    row_range, col_range = resolve_key((row_spec, col_spec), store.shape())
    rows, cols, values = [], [], []
    if row_range.length * col_range.length > len(store):
        # fewer entries than cells: filter the entries, then order them by window position
        row_idx = row_range.indices()
        col_idx = col_range.indices()
        found = [((row_idx.index(r), col_idx.index(c)), r, c, v)
                 for (r, c), v in store.items() if r in row_idx and c in col_idx]
        found.sort(key=lambda item: item[0])
        for _, r, c, v in found:
            rows.append(r)
            cols.append(c)
            values.append(v)
    else:
        for r in row_range.indices():
            for c in col_range.indices():
                v = store.get(r, c, fill_missing=True)
                if v is MISSING:
                    continue
                rows.append(r)
                cols.append(c)
                values.append(v)
    return np.array(rows, dtype=index_dtype), np.array(cols, dtype=index_dtype), np.array(values, dtype=value_dtype)


def to_frame(store: Sparse2DStore, index_dtype: str = 'uint32', value_dtype: str = 'float64') -> pd.DataFrame:
    """Returns the stored entries as a (row, col, value) DataFrame in external orientation."""
    items = store.items()
    return pd.DataFrame({
        FrameColumn.ROW: np.array([k[0] for k, _ in items], dtype=index_dtype),
        FrameColumn.COL: np.array([k[1] for k, _ in items], dtype=index_dtype),
        FrameColumn.VALUE: np.array([v for _, v in items], dtype=value_dtype),
    })


def from_frame(store: Sparse2DStore, df: pd.DataFrame) -> None:
    """Ingest the rows of a (row, col, value) DataFrame into the store, in row order."""
    for col in FrameColumn.REQUIRED:
        if col not in df.columns:
            raise InvalidArgumentError(f"Column \"{col}\" not found in DataFrame, expected columns: {FrameColumn.REQUIRED}")
    bulk_ingest(store,
                df[FrameColumn.ROW].to_numpy(),
                df[FrameColumn.COL].to_numpy(),
                df[FrameColumn.VALUE].to_numpy())


def to_coo(store: Sparse2DStore, value_dtype: str = 'float64') -> coo_matrix:
    """Returns the store as a scipy COO matrix of the same shape and orientation."""
    items = store.items()
    rows = np.array([k[0] for k, _ in items], dtype=np.int64)
    cols = np.array([k[1] for k, _ in items], dtype=np.int64)
    values = np.array([v for _, v in items], dtype=value_dtype)
    return coo_matrix((values, (rows, cols)), shape=store.shape())
