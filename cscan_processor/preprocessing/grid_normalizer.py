"""
Amplitude Grid Normalizer

Linearly rescales raw echo amplitudes so the grid spans [0, 1].
"""

import numpy as np
import logging

from ..data_models import AmplitudeGrid
from ..utils.grid_utils import as_amplitude_grid


class GridNormalizer:
    """Min-max normalizer for amplitude grids."""

    def __init__(self):
        """Initialize grid normalizer."""
        self.logger = logging.getLogger(__name__)

    def normalize(self, grid: AmplitudeGrid) -> np.ndarray:
        """
        Rescale a grid so its minimum maps to 0.0 and its maximum to 1.0.

        A constant grid (including an all-zero or single-cell grid) has no
        range to stretch and is returned unchanged.

        Args:
            grid: Input amplitude grid

        Returns:
            New normalized grid
        """
        data = as_amplitude_grid(grid)
        if data.size == 0:
            return data

        min_val = np.min(data)
        max_val = np.max(data)
        value_range = max_val - min_val

        if value_range == 0:
            self.logger.debug(f"Constant grid {data.shape} (value={min_val}), normalization skipped")
            return data

        self.logger.debug(f"Normalizing grid {data.shape}: range [{min_val:.4g}, {max_val:.4g}]")

        return (data - min_val) / value_range
