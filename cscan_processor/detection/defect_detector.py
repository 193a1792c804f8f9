"""
Flood-Fill Defect Detector

Groups above-threshold cells into 4-connected regions and reports every region
of at least the minimum area as a defect.
"""

import cv2
import numpy as np
from typing import Dict, List, Optional, Tuple
import logging

from ..data_models import AmplitudeGrid, Defect, DefectBounds, RasterImage
from ..exceptions import InvalidArgumentError
from ..preprocessing.thresholder import Thresholder
from ..utils.config_manager import ConfigManager
from ..utils.grid_utils import as_amplitude_grid


MIN_DEFECT_AREA = 5


class DefectDetector:
    """Connected-component defect detector over thresholded amplitude grids."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize defect detector.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)
        self.thresholder = Thresholder()

        # Get detection configuration
        detection_config = self.config.get_detection_params()

        # Smaller regions are treated as noise
        self.min_area = int(detection_config.get('min_defect_area', MIN_DEFECT_AREA))

        # Overlay drawing
        rendering_config = self.config.get_rendering_params()
        self.overlay_color = tuple(rendering_config.get('overlay_color', [255, 255, 255]))
        self.overlay_thickness = int(rendering_config.get('overlay_thickness', 1))

        self.logger.info(f"Defect detector initialized: min_area={self.min_area} pixels")

    def detect(self,
               grid: AmplitudeGrid,
               threshold: Optional[float],
               min_area: Optional[int] = None) -> List[Defect]:
        """
        Detect defects in an amplitude grid.

        Args:
            grid: Amplitude grid
            threshold: Cells strictly above this value are flaw candidates
            min_area: Smallest reported region (defaults to detection.min_defect_area)

        Returns:
            Defects in row-major discovery order (DEF-001, DEF-002, ...)
        """
        _, defects = self.label_regions(grid, threshold, min_area)
        return defects

    def label_regions(self,
                      grid: AmplitudeGrid,
                      threshold: Optional[float],
                      min_area: Optional[int] = None) -> Tuple[np.ndarray, List[Defect]]:
        """
        Label connected above-threshold regions.

        The grid is scanned as a flat row-major buffer (index = row * cols + col).
        Each unvisited qualifying cell seeds an iterative flood fill whose stack
        receives neighbours in the order (x+1, y), (x-1, y), (x, y+1), (x, y-1).
        Every examined cell is marked visited, so no cell is examined twice.

        Args:
            grid: Amplitude grid
            threshold: Cells strictly above this value are flaw candidates
            min_area: Smallest reported region (defaults to detection.min_defect_area)

        Returns:
            Tuple of (labels, defects); labels is an int32 grid where 0 marks
            background or discarded regions and n marks the pixels of DEF-n
        """
        if threshold is None:
            raise InvalidArgumentError("Defect detection requires a threshold")
        if min_area is None:
            min_area = self.min_area
        if isinstance(min_area, bool) or not isinstance(min_area, (int, np.integer)) or min_area < 1:
            raise InvalidArgumentError(f"min_area must be a positive integer, got {min_area!r}")

        values = as_amplitude_grid(grid)
        rows, cols = values.shape
        labels = np.zeros((rows, cols), dtype=np.int32)
        defects: List[Defect] = []

        if values.size == 0:
            return labels, defects

        mask = self.thresholder.apply(values, threshold).ravel().astype(bool).tolist()
        flat_values = values.ravel().tolist()
        flat_labels = labels.reshape(-1)
        visited = bytearray(rows * cols)
        discarded = 0

        for seed in np.flatnonzero(mask).tolist():
            if visited[seed]:
                continue

            pixels, region = self._flood_fill(seed, rows, cols, mask, flat_values, visited)

            if len(pixels) < min_area:
                discarded += 1
                continue

            number = len(defects) + 1
            flat_labels[pixels] = number
            defects.append(self._make_defect(number, len(pixels), region))

        self.logger.debug(f"Detected {len(defects)} defects in grid {values.shape} "
                          f"(threshold={threshold}, {discarded} regions below {min_area} pixels)")

        return labels, defects

    def _flood_fill(self, seed: int, rows: int, cols: int,
                    mask: List[bool], values: List[float],
                    visited: bytearray) -> Tuple[List[int], Dict[str, float]]:
        """Fill one 4-connected region starting at a flat index."""
        pixels: List[int] = []
        stack = [seed]
        sum_x = sum_y = 0
        max_value = -np.inf
        seed_y, seed_x = divmod(seed, cols)
        min_x = max_x = seed_x
        min_y = max_y = seed_y

        while stack:
            index = stack.pop()
            if visited[index]:
                continue
            visited[index] = 1
            if not mask[index]:
                continue

            y, x = divmod(index, cols)
            pixels.append(index)
            sum_x += x
            sum_y += y
            max_value = max(max_value, values[index])
            min_x = min(min_x, x)
            max_x = max(max_x, x)
            min_y = min(min_y, y)
            max_y = max(max_y, y)

            if x + 1 < cols:
                stack.append(index + 1)
            if x - 1 >= 0:
                stack.append(index - 1)
            if y + 1 < rows:
                stack.append(index + cols)
            if y - 1 >= 0:
                stack.append(index - cols)

        region = {
            'sum_x': sum_x, 'sum_y': sum_y, 'max_value': max_value,
            'min_x': min_x, 'max_x': max_x, 'min_y': min_y, 'max_y': max_y,
        }
        return pixels, region

    @staticmethod
    def _make_defect(number: int, area: int, region: Dict[str, float]) -> Defect:
        return Defect(
            id=f"DEF-{number:03d}",
            centroid=(region['sum_x'] / area, region['sum_y'] / area),
            area=area,
            max_amplitude=float(region['max_value']),
            bounds=DefectBounds(
                min_x=int(region['min_x']),
                max_x=int(region['max_x']),
                min_y=int(region['min_y']),
                max_y=int(region['max_y'])
            )
        )

    def summarize(self, defects: List[Defect]) -> Dict[str, float]:
        """
        Summarize a defect list for reporting.

        Args:
            defects: Defects from one detection call

        Returns:
            Count, total/largest/mean area and peak amplitude
        """
        if not defects:
            return {
                'defect_count': 0,
                'total_area': 0,
                'largest_area': 0,
                'mean_area': 0.0,
                'peak_amplitude': 0.0
            }

        areas = [d.area for d in defects]
        return {
            'defect_count': len(defects),
            'total_area': int(sum(areas)),
            'largest_area': int(max(areas)),
            'mean_area': float(np.mean(areas)),
            'peak_amplitude': float(max(d.max_amplitude for d in defects))
        }

    def create_defect_overlay(self,
                              image: RasterImage,
                              defects: List[Defect],
                              grid_shape: Tuple[int, int]) -> RasterImage:
        """
        Draw defect bounding boxes and IDs on a copy of a raster.

        Args:
            image: Raster rendered from the grid the defects were found in
            defects: Defects to draw
            grid_shape: (rows, cols) of that grid

        Returns:
            New raster with the overlay; the input raster is not modified
        """
        rows, cols = grid_shape
        overlay = image.pixels.copy()
        if rows == 0 or cols == 0:
            return RasterImage(pixels=overlay)

        scale_x = image.width / cols
        scale_y = image.height / rows
        color = tuple(int(c) for c in self.overlay_color[:3])

        # Draw on the color planes only; alpha stays opaque
        canvas = np.ascontiguousarray(overlay[:, :, :3])

        for defect in defects:
            top_left = (int(defect.bounds.min_x * scale_x), int(defect.bounds.min_y * scale_y))
            bottom_right = (int(np.ceil((defect.bounds.max_x + 1) * scale_x)) - 1,
                            int(np.ceil((defect.bounds.max_y + 1) * scale_y)) - 1)
            cv2.rectangle(canvas, top_left, bottom_right, color, self.overlay_thickness)
            cv2.putText(canvas, defect.id, (top_left[0], max(top_left[1] - 2, 8)),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.3, color, 1, cv2.LINE_AA)

        overlay[:, :, :3] = canvas
        return RasterImage(pixels=overlay)
