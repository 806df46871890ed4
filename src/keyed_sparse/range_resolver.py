import operator
import numpy as np
from typing import NamedTuple, Union

from .sparse_errors import InvalidArgumentError


AxisSpec = Union[int, np.integer, slice]


class AxisRange(NamedTuple):
    """Concrete iteration bounds for one axis of a 2D request."""
    start: int
    stop: int
    step: int
    length: int

    def indices(self) -> range:
        """The indices covered by this range, in iteration order."""
        if self.length == 0:
            return range(0)
        return range(self.start, self.start + self.step * self.length, self.step)


def _is_integer(spec) -> bool:
    return isinstance(spec, (int, np.integer)) and not isinstance(spec, (bool, np.bool_))


def resolve_axis(spec: AxisSpec, axis_length: int) -> AxisRange:
    """
    Resolve a single-axis index specification against the length of that axis.

    Args:
        spec: Either a non-negative integer index or a slice.
        axis_length: The current length of the axis.

    Returns:
        AxisRange(start, stop, step, length). A single index resolves to
        (index, index, 1, 1) and is not clamped against axis_length; a slice
        follows the standard clamping rules of python slices.

    Raises:
        InvalidArgumentError: If spec is neither a non-negative integer nor a
            slice of integers with a non-zero step.
    """
    if _is_integer(spec):
        idx = int(spec)
        if idx < 0:
            raise InvalidArgumentError(f"single index must be non-negative, got {idx}")
        return AxisRange(idx, idx, 1, 1)

    if not isinstance(spec, slice):
        raise InvalidArgumentError(f"index must be an integer or a slice, got {type(spec).__name__}")

    components = []
    for name in ('start', 'stop', 'step'):
        value = getattr(spec, name)
        if value is None:
            components.append(None)
        elif _is_integer(value):
            components.append(operator.index(value))
        else:
            raise InvalidArgumentError(f"slice {name} must be an integer or None, got {type(value).__name__}")
    if components[2] == 0:
        raise InvalidArgumentError("slice step cannot be zero")

    start, stop, step = slice(*components).indices(axis_length)
    return AxisRange(start, stop, step, len(range(start, stop, step)))


def resolve_key(key, shape: tuple[int, int]) -> tuple[AxisRange, AxisRange]:
    """Resolve a two-element index/slice expression against a (rows, cols) shape."""
    if not isinstance(key, tuple) or len(key) != 2:
        raise InvalidArgumentError("number of indices must be equal to 2")
    row_spec, col_spec = key
    return resolve_axis(row_spec, shape[0]), resolve_axis(col_spec, shape[1])
