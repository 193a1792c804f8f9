"""
C-Scan Colorizer

Rasterizes a scalar amplitude grid into an RGBA image of arbitrary size using
nearest-neighbour sampling and a named colormap.
"""

import numpy as np
from typing import Optional, Union
import logging

from ..data_models import AmplitudeGrid, ColormapKind, RasterImage
from ..exceptions import InvalidArgumentError, ResourceError
from ..utils.config_manager import ConfigManager
from ..utils.grid_utils import as_amplitude_grid
from .colormaps import Colormap, get_colormap


class Colorizer:
    """Maps processed amplitude grids to RGBA rasters."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize colorizer.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        # Get rendering configuration
        rendering_config = self.config.get_rendering_params()
        self.interpolation = rendering_config.get('interpolation', 'lab')

        self.logger.info(f"Colorizer initialized: interpolation={self.interpolation}")

    def rasterize(self,
                  grid: AmplitudeGrid,
                  width: int,
                  height: int,
                  colormap: Union[str, ColormapKind, Colormap] = ColormapKind.JET) -> RasterImage:
        """
        Render a grid as a width x height RGBA raster.

        Output pixel (x, y) samples source cell
        (floor(y / height * rows), floor(x / width * cols)). Lookups into an
        empty grid resolve to 0.0. Alpha is always 255.

        Args:
            grid: Scalar grid, normally in [0, 1]
            width: Output width in pixels
            height: Output height in pixels
            colormap: Colormap name, kind or instance

        Returns:
            New raster image owned by the caller
        """
        for name, value in (('width', width), ('height', height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")

        if not isinstance(colormap, Colormap):
            colormap = get_colormap(colormap, self.interpolation)

        data = as_amplitude_grid(grid)
        rows, cols = data.shape

        pixels = self._allocate_surface(width, height)

        if rows == 0 or cols == 0:
            pixels[:, :, :3] = colormap.map(0.0)
        else:
            data_y = np.floor(np.arange(height) / height * rows).astype(np.intp)
            data_x = np.floor(np.arange(width) / width * cols).astype(np.intp)

            # Color each source cell once, then sample
            source_colors = colormap.map(data)
            pixels[:, :, :3] = source_colors[data_y[:, None], data_x[None, :]]

        pixels[:, :, 3] = 255

        self.logger.debug(f"Rasterized grid {data.shape} to {width}x{height} with '{colormap.name}'")

        return RasterImage(pixels=pixels)

    def _allocate_surface(self, width: int, height: int) -> np.ndarray:
        """
        Allocate the RGBA pixel buffer.

        Raises:
            ResourceError: If the buffer cannot be allocated
        """
        try:
            return np.empty((height, width, 4), dtype=np.uint8)
        except (MemoryError, ValueError) as e:
            raise ResourceError(f"Unable to allocate {width}x{height} raster surface: {e}") from e
