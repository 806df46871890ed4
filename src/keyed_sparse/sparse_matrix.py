import operator
import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .sparse_errors import InvalidArgumentError, OutOfBoundsError
from .constants import MISSING


Key = tuple[int, int]

UINT32_MAX = int(np.iinfo(np.uint32).max)


def orient_key(key: Key, transposed: bool) -> Key:
    """Map a coordinate between the external and the physical orientation.

    The mapping is its own inverse, so the same call converts in both directions.
    """
    if transposed:
        return key[1], key[0]
    return key


def as_coordinate(value, name: str, max_index: Optional[int] = None) -> int:
    """Convert a single coordinate to a python int, rejecting anything that is not a valid index.

    The upper limit is only enforced when max_index is given.
    """
    if isinstance(value, (bool, np.bool_)):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(value).__name__}")
    try:
        idx = operator.index(value)
    except TypeError as e:
        raise InvalidArgumentError(f"{name} must be an integer, got {type(value).__name__}") from e
    if idx < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {idx}")
    if max_index is not None and idx > max_index:
        raise InvalidArgumentError(f"{name} {idx} exceeds the largest supported index {max_index}")
    return idx


@dataclass
class Sparse2DStore:
    """Coordinate-keyed storage of a 2D matrix where absent cells read as zero.

    Entries are always kept under the orientation they were written in. The
    ``transposed`` flag only changes how external keys map onto stored keys and
    how the shape is reported, so transposing never touches ``data_store``.
    ``max_row`` and ``max_col`` track the physical axes of ``data_store``.
    """
    data_store: dict[Key, float] = field(default_factory=dict)
    max_row: int = 0
    max_col: int = 0
    transposed: bool = False
    max_index: int = UINT32_MAX

    def set(self, row: int, col: int, value: float) -> None:
        """Insert or overwrite the value at external position (row, col)."""
        row = as_coordinate(row, 'row', self.max_index)
        col = as_coordinate(col, 'col', self.max_index)
        key = orient_key((row, col), self.transposed)
        # marks live in the same (physical) space as the stored keys
        self.max_row = max(key[0], self.max_row)
        self.max_col = max(key[1], self.max_col)
        self.data_store[key] = float(value)

    def get(self, row: int, col: int, fill_missing: bool = False) -> Optional[float]:
        """Get the value at external position (row, col).

        Args:
            row: External row index.
            col: External column index.
            fill_missing: If True, return None for a cell that was never written
                instead of 0.0, and skip the bounds check.

        Returns:
            The stored value, 0.0 for an absent cell within the known extent,
            or None for an absent cell when fill_missing is set.

        Raises:
            OutOfBoundsError: If the cell is absent, fill_missing is False and an
                index lies beyond the largest index written on its axis.
        """
        # nothing above max_index can be stored, so reads only need a valid index
        row = as_coordinate(row, 'row')
        col = as_coordinate(col, 'col')
        key = orient_key((row, col), self.transposed)
        value = self.data_store.get(key)
        if value is not None:
            return value
        if fill_missing:
            return MISSING

        n_rows, n_cols = self._extent()
        if row >= n_rows:
            raise OutOfBoundsError(row, 0, n_rows)
        if col >= n_cols:
            raise OutOfBoundsError(col, 1, n_cols)
        return 0.0

    def _extent(self) -> Key:
        """High-water marks plus one, in external orientation, regardless of emptiness."""
        return orient_key((self.max_row + 1, self.max_col + 1), self.transposed)

    def shape(self) -> Key:
        """Returns (rows, cols) in external orientation, (0, 0) when nothing was written."""
        if not self.data_store:
            return 0, 0
        return self._extent()

    def transpose(self) -> None:
        """Swap the external orientation of the matrix without moving any entry."""
        self.transposed = not self.transposed

    def __getitem__(self, key) -> float:
        """Returns the value at position (i, j), or 0 if it was never written."""
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise InvalidArgumentError("Sparse2DStore indices must be a tuple of length 2")
        return self.get(i, j)

    def __setitem__(self, key, value: float) -> None:
        """Sets the value at position (i, j)."""
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise InvalidArgumentError("Sparse2DStore indices must be a tuple of length 2")
        self.set(i, j, value)

    def __contains__(self, key) -> bool:
        """Checks if position (i, j) was explicitly written.

        Args:
            key: A tuple (i, j) in external orientation

        Returns:
            True if the position holds a stored value (including an explicit zero), False otherwise.
        """
        if isinstance(key, tuple) and len(key) == 2:
            return orient_key(key, self.transposed) in self.data_store
        return False

    def __len__(self) -> int:
        """Returns the number of stored elements."""
        return len(self.data_store)

    def __iter__(self) -> Iterator[Key]:
        """Allows iteration over the external position tuples of stored elements."""
        return iter(self.keys())

    def keys(self) -> list[Key]:
        """Returns the external positions of stored elements."""
        return [orient_key(k, self.transposed) for k in self.data_store.keys()]

    def values(self):
        """Returns the values of stored elements."""
        return self.data_store.values()

    def items(self) -> list[tuple[Key, float]]:
        """Returns a list of (key, value) pairs with keys in external orientation."""
        return [(orient_key(k, self.transposed), v) for k, v in self.data_store.items()]

    def __repr__(self) -> str:
        """String representation of the matrix."""
        if not self.data_store:
            return f"Sparse2DStore(shape={self.shape()}, {{}})"
        items_str = ", ".join(f"{k}: {v}" for k, v in sorted(self.items()))
        return f"Sparse2DStore(shape={self.shape()}, {{{items_str}}})"

    def copy(self) -> 'Sparse2DStore':
        """Returns a copy of the store with the same orientation and high-water marks."""
        return Sparse2DStore(data_store=self.data_store.copy(),
                             max_row=self.max_row,
                             max_col=self.max_col,
                             transposed=self.transposed,
                             max_index=self.max_index)
