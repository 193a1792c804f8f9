"""
Pytest configuration and fixtures for C-Scan processor tests.
"""

import pytest
import numpy as np

from cscan_processor.utils.config_manager import ConfigManager


@pytest.fixture
def config_manager():
    """Fixture providing a configuration manager instance."""
    return ConfigManager()


@pytest.fixture
def single_blob_grid():
    """10x10 zero grid with a 3x3 block of 0.9 at rows 3-5, cols 3-5."""
    grid = np.zeros((10, 10), dtype=np.float64)
    grid[3:6, 3:6] = 0.9
    return grid


@pytest.fixture
def two_blob_grid():
    """10x10 zero grid with two separated 3x3 blocks of 0.8."""
    grid = np.zeros((10, 10), dtype=np.float64)
    grid[1:4, 1:4] = 0.8
    grid[1:4, 6:9] = 0.8
    return grid


@pytest.fixture
def constant_grid():
    """5x5 grid filled with 0.5."""
    return np.full((5, 5), 0.5, dtype=np.float64)


@pytest.fixture
def random_grid():
    """Reproducible 40x60 grid of uniform noise."""
    rng = np.random.default_rng(1234)
    return rng.random((40, 60))


@pytest.fixture
def jagged_grid():
    """Partially populated capture buffer with short and missing rows."""
    return [
        [0.1, 0.2, 0.3, 0.4],
        [0.5, 0.6],
        None,
        [0.7, None, 0.9, 1.0],
    ]
