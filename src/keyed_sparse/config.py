import numpy as np
from typing import Literal
from dataclasses import dataclass

from .constants import INDEX_DTYPES, VALUE_DTYPES
from .sparse_errors import InvalidIndexDtypeError, InvalidValueDtypeError


@dataclass
class MatrixConfig:
    """
    Configuration for a sparse matrix.

    This class defines the dtypes used when coordinates and values leave the
    coordinate map as arrays, and whether bulk operations report their timing.
    """

    index_dtype: Literal['uint32', 'uint64'] = 'uint32'
    """Dtype of coordinate arrays. Also bounds the largest coordinate that can be written."""

    value_dtype: Literal['float64', 'float32'] = 'float64'
    """Dtype of the dense blocks and value arrays produced by reads."""

    verbose: bool = False
    """Whether bulk operations print how long they took."""

    @property
    def max_index(self) -> int:
        """Largest coordinate representable by index_dtype."""
        return int(np.iinfo(self.index_dtype).max)

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.index_dtype not in INDEX_DTYPES:
            raise InvalidIndexDtypeError(self.index_dtype, INDEX_DTYPES)
        if self.value_dtype not in VALUE_DTYPES:
            raise InvalidValueDtypeError(self.value_dtype, VALUE_DTYPES)
