"""
Grid Helpers

Coerces caller-supplied amplitude grids into dense float arrays.
"""

import numpy as np

from ..data_models import AmplitudeGrid
from ..exceptions import InvalidArgumentError


def as_amplitude_grid(grid: AmplitudeGrid) -> np.ndarray:
    """
    Convert an amplitude grid into a new dense 2-D float64 array.

    Capture buffers may be partially populated: rows can be shorter than the
    longest row, rows or cells can be None. Every missing cell becomes 0.0.
    The input is never modified.

    Args:
        grid: 2-D array or sequence of rows

    Returns:
        Array of shape (rows, cols), cols being the longest row length

    Raises:
        InvalidArgumentError: If the grid has more than two dimensions
    """
    if isinstance(grid, np.ndarray) and grid.dtype != object:
        if grid.ndim == 2:
            return grid.astype(np.float64, copy=True)
        if grid.ndim == 1:
            return grid.astype(np.float64).reshape(1, -1)
        raise InvalidArgumentError(f"Amplitude grid must be 2-D, got {grid.ndim} dimensions")

    if grid is None:
        return np.zeros((0, 0), dtype=np.float64)

    rows = list(grid)
    try:
        cols = max((len(row) for row in rows if row is not None), default=0)
    except TypeError:
        raise InvalidArgumentError("Amplitude grid rows must be sequences of values")
    dense = np.zeros((len(rows), cols), dtype=np.float64)

    for y, row in enumerate(rows):
        if row is None:
            continue
        for x, value in enumerate(row):
            if isinstance(value, (list, tuple, np.ndarray)):
                raise InvalidArgumentError("Amplitude grid must be 2-D")
            if value is not None:
                dense[y, x] = float(value)

    return dense
