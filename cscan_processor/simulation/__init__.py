"""
Simulation Module

Generates synthetic C-Scan grids with known ground truth for tests and demos.
"""

from .synthetic_data_generator import SyntheticDataGenerator

__all__ = ['SyntheticDataGenerator']
