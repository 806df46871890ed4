"""
Coordinate-keyed sparse 2D matrix.

A dictionary-of-keys matrix of floating point values with constant time
transpose and numpy style slicing for dense and sparse block access.
"""

__version__ = "0.1.0"

from .matrix import Matrix
from .sparse_matrix import Sparse2DStore, orient_key
from .range_resolver import AxisRange, resolve_axis, resolve_key
from .sparse_utils import bulk_ingest, dense_read, dense_write, sparse_read
from .sparse_errors import (SparseMatrixError, SparseConfigError, OutOfBoundsError, InvalidArgumentError,
                            ShapeMismatchError, DimensionalityError)
from .config import MatrixConfig

__all__ = [
    "Matrix",
    "Sparse2DStore",
    "orient_key",
    "AxisRange",
    "resolve_axis",
    "resolve_key",
    "bulk_ingest",
    "dense_read",
    "dense_write",
    "sparse_read",
    "SparseMatrixError",
    "SparseConfigError",
    "OutOfBoundsError",
    "InvalidArgumentError",
    "ShapeMismatchError",
    "DimensionalityError",
    "MatrixConfig",
]
