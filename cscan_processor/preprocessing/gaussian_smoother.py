"""
3x3 Gaussian Smoother

Single-pass noise reduction with the integer-weighted kernel
[[1, 2, 1], [2, 4, 2], [1, 2, 1]] / 16. Border cells are copied unchanged.
"""

import numpy as np
import logging

from ..data_models import AmplitudeGrid
from ..utils.grid_utils import as_amplitude_grid


GAUSSIAN_KERNEL = np.array([
    [1, 2, 1],
    [2, 4, 2],
    [1, 2, 1]
], dtype=np.float64)
KERNEL_SUM = 16.0


class GaussianSmoother:
    """Fixed-kernel Gaussian blur over the interior of an amplitude grid."""

    def __init__(self):
        """Initialize Gaussian smoother."""
        self.logger = logging.getLogger(__name__)

    def smooth(self, grid: AmplitudeGrid) -> np.ndarray:
        """
        Apply one pass of the 3x3 kernel to every interior cell.

        Args:
            grid: Input amplitude grid

        Returns:
            New smoothed grid; row 0, last row, column 0 and last column are
            copied from the input
        """
        data = as_amplitude_grid(grid)
        rows, cols = data.shape
        smoothed = data.copy()

        if rows < 3 or cols < 3:
            self.logger.debug(f"Grid {data.shape} has no interior, smoothing skipped")
            return smoothed

        # Accumulate in kernel order and divide last so each cell matches
        # the cell-by-cell weighted sum exactly
        acc = np.zeros((rows - 2, cols - 2), dtype=np.float64)
        for ky in range(3):
            for kx in range(3):
                acc += data[ky:rows - 2 + ky, kx:cols - 2 + kx] * GAUSSIAN_KERNEL[ky, kx]

        smoothed[1:-1, 1:-1] = acc / KERNEL_SUM

        self.logger.debug(f"Smoothed {(rows - 2) * (cols - 2)} interior cells of grid {data.shape}")

        return smoothed
