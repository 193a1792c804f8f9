"""
Synthetic C-Scan Data Generator

Produces low-amplitude background noise with circular blobs whose amplitude
decays linearly from the center to the edge.
"""

import numpy as np
from typing import List, Optional, Tuple
import logging

from ..data_models import SyntheticBlob
from ..exceptions import InvalidArgumentError
from ..utils.config_manager import ConfigManager


class SyntheticDataGenerator:
    """Seedable generator of synthetic amplitude grids."""

    def __init__(self,
                 config_manager: Optional[ConfigManager] = None,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize synthetic data generator.

        Args:
            config_manager: Configuration manager instance
            seed: Seed for a new random generator (overrides synthetic.seed)
            rng: Random generator to draw from; takes precedence over seed
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        # Get synthetic data configuration
        syn_config = self.config.get_synthetic_params()

        self.noise_level = float(syn_config.get('noise_level', 0.2))
        self.min_radius = int(syn_config.get('min_radius', 5))
        self.max_radius = int(syn_config.get('max_radius', 15))  # exclusive
        self.min_amplitude = float(syn_config.get('min_amplitude', 0.6))
        self.max_amplitude = float(syn_config.get('max_amplitude', 1.0))
        self.default_defect_count = int(syn_config.get('defect_count', 2))

        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else syn_config.get('seed'))
        self.rng = rng

        self.logger.info(f"Synthetic data generator initialized: noise={self.noise_level}, "
                         f"radius=[{self.min_radius}, {self.max_radius}), "
                         f"amplitude=[{self.min_amplitude}, {self.max_amplitude})")

    def generate(self, rows: int, cols: int, defect_count: Optional[int] = None) -> np.ndarray:
        """
        Generate a synthetic amplitude grid.

        Args:
            rows: Number of rows
            cols: Number of columns
            defect_count: Number of blobs (defaults to synthetic.defect_count)

        Returns:
            Grid of shape (rows, cols)
        """
        grid, _ = self.generate_with_ground_truth(rows, cols, defect_count)
        return grid

    def generate_with_ground_truth(self,
                                   rows: int,
                                   cols: int,
                                   defect_count: Optional[int] = None) -> Tuple[np.ndarray, List[SyntheticBlob]]:
        """
        Generate a synthetic grid along with the blobs placed in it.

        Draw order from the generator: the full noise field first, then for
        each blob center x, center y, radius and amplitude. Later blobs
        overwrite earlier ones where they overlap.

        Args:
            rows: Number of rows
            cols: Number of columns
            defect_count: Number of blobs (defaults to synthetic.defect_count)

        Returns:
            Tuple of (grid, blobs)
        """
        if defect_count is None:
            defect_count = self.default_defect_count

        if rows < 1 or cols < 1:
            raise InvalidArgumentError(f"Grid dimensions must be positive, got {rows}x{cols}")
        if defect_count < 0:
            raise InvalidArgumentError(f"defect_count must be non-negative, got {defect_count}")

        # Background noise
        grid = self.rng.uniform(0.0, self.noise_level, size=(rows, cols))

        blobs: List[SyntheticBlob] = []
        for _ in range(defect_count):
            blob = SyntheticBlob(
                center_x=int(self.rng.integers(0, cols)),
                center_y=int(self.rng.integers(0, rows)),
                radius=int(self.rng.integers(self.min_radius, self.max_radius)),
                amplitude=float(self.rng.uniform(self.min_amplitude, self.max_amplitude))
            )
            self._paint_blob(grid, blob)
            blobs.append(blob)

        self.logger.debug(f"Generated {rows}x{cols} synthetic grid with {len(blobs)} blobs")

        return grid, blobs

    @staticmethod
    def _paint_blob(grid: np.ndarray, blob: SyntheticBlob) -> None:
        rows, cols = grid.shape
        y0, y1 = max(0, blob.center_y - blob.radius), min(rows, blob.center_y + blob.radius)
        x0, x1 = max(0, blob.center_x - blob.radius), min(cols, blob.center_x + blob.radius)

        y_indices, x_indices = np.ogrid[y0:y1, x0:x1]
        distance = np.sqrt((x_indices - blob.center_x)**2 + (y_indices - blob.center_y)**2)
        inside = distance < blob.radius

        window = grid[y0:y1, x0:x1]
        window[inside] = blob.amplitude * (1 - distance[inside] / blob.radius)
