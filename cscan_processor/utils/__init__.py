"""
Utility Functions and Helpers

Common utilities for the C-Scan processing pipeline.
"""

from .config_manager import ConfigManager
from .grid_utils import as_amplitude_grid

__all__ = ['ConfigManager', 'as_amplitude_grid']
