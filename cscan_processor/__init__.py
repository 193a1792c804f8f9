"""
Ultrasonic C-Scan Processor

Turns 2-D amplitude grids captured during an ultrasonic scan into colorized
raster images and lists of discrete flaw candidates.

This package implements:
- Min-max amplitude normalization
- 3x3 Gaussian smoothing with preserved borders
- Strict greater-than thresholding
- Nearest-neighbour rasterization through Lab-interpolated colormaps
- 4-connected flood-fill defect detection
- Seedable synthetic C-Scan data generation
"""

__version__ = "1.0.0"
__author__ = "Ultrasonic Inspection Tools Team"

from .preprocessing import GridNormalizer, GaussianSmoother, Thresholder
from .rendering import Colorizer, Colormap, get_colormap
from .detection import DefectDetector
from .simulation import SyntheticDataGenerator
from .processor import CScanProcessor
from .exceptions import CScanError, ConfigurationError, ResourceError, InvalidArgumentError
from .data_models import (
    ProcessingOptions, ColormapKind, InterpolationMode, RasterImage,
    Defect, DefectBounds, SyntheticBlob, ScanAnalysis
)

__all__ = [
    # Pipeline
    'CScanProcessor',
    # Preprocessing
    'GridNormalizer', 'GaussianSmoother', 'Thresholder',
    # Rendering
    'Colorizer', 'Colormap', 'get_colormap',
    # Detection
    'DefectDetector',
    # Simulation
    'SyntheticDataGenerator',
    # Errors
    'CScanError', 'ConfigurationError', 'ResourceError', 'InvalidArgumentError',
    # Data Models
    'ProcessingOptions', 'ColormapKind', 'InterpolationMode', 'RasterImage',
    'Defect', 'DefectBounds', 'SyntheticBlob', 'ScanAnalysis'
]
