
class SparseMatrixError(Exception):
    """Base class for sparse matrix errors."""
    pass

class SparseConfigError(ValueError):
    """Base class for sparse matrix configuration errors."""
    pass



class OutOfBoundsError(SparseMatrixError, IndexError):
    """Raised when a read of an absent cell lies beyond the known extent of an axis."""

    def __init__(self, index: int, axis: int, size: int):
        self.index = index
        self.axis = axis
        self.size = size
        message = f"index {index} is out of bounds for axis {axis} with size {size}"
        super().__init__(message)


class InvalidArgumentError(SparseMatrixError, ValueError):
    """Raised when an index, slice or coordinate argument is malformed."""
    pass


class ShapeMismatchError(SparseMatrixError, ValueError):
    """Raised when arrays cannot be used together because their shapes differ."""

    def __init__(self, message: str, shapes: tuple = ()):
        self.shapes = shapes
        super().__init__(message)


class DimensionalityError(ShapeMismatchError):
    """Raised when an array argument does not have the expected number of dimensions."""

    def __init__(self, name: str, expected_ndim: int, actual_ndim: int):
        self.name = name
        self.expected_ndim = expected_ndim
        self.actual_ndim = actual_ndim
        message = f"{name} must be a {expected_ndim}-dimensional array, got {actual_ndim} dimensions"
        super().__init__(message)


class InvalidIndexDtypeError(SparseConfigError):
    """Raised when an unsupported coordinate dtype is configured."""

    def __init__(self, dtype: str, valid_dtypes: list):
        self.dtype = dtype
        self.valid_dtypes = valid_dtypes
        message = f"Invalid index dtype '{dtype}'. Must be one of: {valid_dtypes}"
        super().__init__(message)


class InvalidValueDtypeError(SparseConfigError):
    """Raised when an unsupported value dtype is configured."""

    def __init__(self, dtype: str, valid_dtypes: list):
        self.dtype = dtype
        self.valid_dtypes = valid_dtypes
        message = f"Invalid value dtype '{dtype}'. Must be one of: {valid_dtypes}"
        super().__init__(message)
