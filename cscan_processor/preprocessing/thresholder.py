"""
Amplitude Thresholder

Converts a continuous amplitude grid into a binary flaw/no-flaw mask.
"""

import numpy as np
import logging
from typing import Optional

from ..data_models import AmplitudeGrid
from ..exceptions import InvalidArgumentError
from ..utils.grid_utils import as_amplitude_grid


class Thresholder:
    """Binarizes amplitude grids with a strict greater-than rule."""

    def __init__(self):
        """Initialize thresholder."""
        self.logger = logging.getLogger(__name__)

    def apply(self, grid: AmplitudeGrid, threshold: Optional[float]) -> np.ndarray:
        """
        Binarize a grid.

        Args:
            grid: Input amplitude grid
            threshold: Cells strictly above this value become 1.0, all others 0.0

        Returns:
            New grid of 0.0/1.0 values
        """
        if threshold is None:
            raise InvalidArgumentError("A threshold is required to binarize a grid")
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float, np.integer, np.floating)):
            raise InvalidArgumentError(f"Threshold must be a number, got {threshold!r}")

        data = as_amplitude_grid(grid)
        mask = (data > threshold).astype(np.float64)

        self.logger.debug(f"Threshold {threshold}: {int(np.count_nonzero(mask))}/{mask.size} cells flagged")

        return mask
