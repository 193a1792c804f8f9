"""
Grid Preprocessing Module

Implements amplitude normalization, 3x3 Gaussian smoothing and thresholding.
"""

from .grid_normalizer import GridNormalizer
from .gaussian_smoother import GaussianSmoother
from .thresholder import Thresholder

__all__ = ['GridNormalizer', 'GaussianSmoother', 'Thresholder']
