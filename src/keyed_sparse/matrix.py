import time
import numpy as np
import pandas as pd
from typing import Optional
from scipy.sparse import coo_matrix

from .sparse_matrix import Sparse2DStore
from .sparse_utils import bulk_ingest, dense_read, dense_write, sparse_read, to_frame, from_frame, to_coo
from .sparse_errors import InvalidArgumentError
from .config import MatrixConfig



class Matrix:
    """
    Sparse 2D matrix of floating point values addressed by (row, col) coordinates.

    Cells that were never written read as zero. The matrix grows to hold any
    coordinate written to it, supports numpy style slicing for dense block
    reads and writes, and transposes in constant time.

    Example:
        >>> m = Matrix()
        >>> m.set([0, 1], [0, 2], [1.0, 3.5])
        >>> m.shape()
        (2, 3)
        >>> m[1, 2]
        array([[3.5]])
    """

    def __init__(self, config: MatrixConfig = MatrixConfig()):
        """
        Initialize an empty Matrix

        Args:
            config: MatrixConfig object defining dtypes and verbosity
        """
        self.config = config
        self.config.validate()
        self.store = Sparse2DStore(max_index=self.config.max_index)

    def shape(self) -> tuple[int, int]:
        """(rows, cols) of the matrix, (0, 0) when nothing was written."""
        return self.store.shape()

    @property
    def nnz(self) -> int:
        """Number of explicitly stored entries, explicit zeros included."""
        return len(self.store)

    def __len__(self) -> int:
        return len(self.store)

    def get(self, key: tuple[int, int], fill_missing: bool = False) -> Optional[float]:
        """
        Get the value of a single cell.

        Args:
            key: (row, col) tuple
            fill_missing: Return None instead of 0.0 for a cell that was never written

        Raises:
            OutOfBoundsError: If the cell is absent and an index lies beyond the largest index written on its axis
        """
        if not isinstance(key, tuple) or len(key) != 2:
            raise InvalidArgumentError("number of indices must be equal to 2")
        return self.store.get(key[0], key[1], fill_missing=fill_missing)

    def set(self, i, j, x) -> None:
        """
        Set a batch of cells from three parallel 1D arrays.

        Args:
            i: row indices
            j: column indices
            x: values; a repeated (i, j) keeps its last value
        """
        st = time.time()
        bulk_ingest(self.store, i, j, x)
        self._report('set', st)

    def __getitem__(self, key) -> np.ndarray:
        """Dense 2D block for a (row, col) index/slice expression. Always two dimensional."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise InvalidArgumentError("number of indices must be equal to 2")
        st = time.time()
        block = dense_read(self.store, key[0], key[1], dtype=self.config.value_dtype)
        self._report('__getitem__', st)
        return block

    def __setitem__(self, key, x) -> None:
        """Write a dense 2D block whose shape matches the (row, col) index/slice expression exactly."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise InvalidArgumentError("number of indices must be equal to 2")
        st = time.time()
        dense_write(self.store, key[0], key[1], x)
        self._report('__setitem__', st)

    def find(self, key: Optional[tuple] = None) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Stored entries within a window of the matrix.

        Args:
            key: (row, col) index/slice expression, the whole matrix if None

        Returns:
            (i, j, x) parallel arrays of the entries that were explicitly written inside the window
        """
        if key is None:
            key = (slice(None), slice(None))
        if not isinstance(key, tuple) or len(key) != 2:
            raise InvalidArgumentError("number of indices must be equal to 2")
        st = time.time()
        res = sparse_read(self.store, key[0], key[1],
                          index_dtype=self.config.index_dtype,
                          value_dtype=self.config.value_dtype)
        self._report('find', st)
        return res

    def transpose(self) -> None:
        """Transpose the matrix in place. Constant time, no entries are moved."""
        self.store.transpose()

    def to_frame(self) -> pd.DataFrame:
        """Stored entries as a DataFrame with columns row, col, value."""
        return to_frame(self.store, index_dtype=self.config.index_dtype, value_dtype=self.config.value_dtype)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, config: MatrixConfig = MatrixConfig()) -> 'Matrix':
        """Build a Matrix from a DataFrame with columns row, col, value."""
        m = cls(config=config)
        st = time.time()
        from_frame(m.store, df)
        m._report('from_frame', st)
        return m

    def to_coo(self) -> coo_matrix:
        """Convert to a scipy.sparse.coo_matrix with the same shape and orientation."""
        return to_coo(self.store, value_dtype=self.config.value_dtype)

    def copy(self) -> 'Matrix':
        """Returns an independent copy of the matrix."""
        result = Matrix(config=self.config)
        result.store = self.store.copy()
        return result

    def __repr__(self) -> str:
        return f"Matrix(shape={self.shape()}, nnz={self.nnz}, transposed={self.store.transposed})"

    def _report(self, name: str, st: float) -> None:
        if self.config.verbose:
            print(f"{name}")
            print(f"  took: {time.time() - st} seconds")
