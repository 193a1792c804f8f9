"""
Rendering Module

Implements named colormaps with perceptual interpolation and grid rasterization.
"""

from .colormaps import Colormap, COLORMAP_STOPS, get_colormap
from .colorizer import Colorizer

__all__ = ['Colormap', 'COLORMAP_STOPS', 'get_colormap', 'Colorizer']
