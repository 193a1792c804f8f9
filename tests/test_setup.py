"""
Test basic setup, imports and configuration management.
"""

import pytest
import numpy as np
import cv2
import yaml

from cscan_processor.exceptions import ConfigurationError
from cscan_processor.utils.config_manager import ConfigManager


def test_opencv_import():
    """Test that OpenCV is properly installed and supports float Lab conversion."""
    assert cv2.__version__ is not None

    white = np.ones((1, 1, 3), dtype=np.float32)
    lab = cv2.cvtColor(white, cv2.COLOR_RGB2Lab)
    assert lab[0, 0, 0] == pytest.approx(100.0, abs=0.01)


def test_config_manager():
    """Test that configuration manager works."""
    config = ConfigManager()

    # Test getting values
    assert config.get('processing.colormap') == 'jet'
    assert config.get('detection.min_defect_area') == 5
    assert config.get('missing.key', 'fallback') == 'fallback'

    # Test setting values
    config.set('processing.width', 800)
    assert config.get('processing.width') == 800


def test_config_sections(config_manager):
    """Test section accessors."""
    assert config_manager.get_processing_params()['normalize'] is True
    assert config_manager.get_rendering_params()['interpolation'] == 'lab'
    assert config_manager.get_detection_params()['min_defect_area'] == 5
    assert config_manager.get_synthetic_params()['max_radius'] == 15


@pytest.mark.parametrize("key,value", [
    ('processing.colormap', 'rainbow'),
    ('processing.width', 0),
    ('rendering.interpolation', 'hsv'),
    ('detection.min_defect_area', 0),
    ('synthetic.min_radius', 20),
    ('synthetic.min_amplitude', 1.5),
    ('synthetic.noise_level', -0.1),
    ('detection.min_defect_area', None),
    ('synthetic.max_radius', 'wide'),
])
def test_config_validation(config_manager, key, value):
    """Test that inconsistent values are rejected."""
    with pytest.raises(ConfigurationError):
        config_manager.set(key, value)


def test_missing_config_file(tmp_path):
    """Test error for a configuration path that does not exist."""
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigManager(str(tmp_path / "absent.yaml"))


def test_malformed_config_file(tmp_path):
    """Test error for a configuration file that is not valid YAML."""
    path = tmp_path / "broken.yaml"
    path.write_text("processing: [unclosed\n")

    with pytest.raises(ConfigurationError, match="parsing"):
        ConfigManager(str(path))


def test_save_and_reload(config_manager, tmp_path):
    """Test that a saved configuration loads back with the same values."""
    config_manager.set('processing.colormap', 'thermal')
    path = tmp_path / "saved.yaml"

    config_manager.save(str(path))
    reloaded = ConfigManager(str(path))

    assert reloaded.get('processing.colormap') == 'thermal'
    assert yaml.safe_load(path.read_text())['detection']['min_defect_area'] == 5


def test_project_structure():
    """Test that project structure is correctly set up."""
    from cscan_processor import __version__
    assert __version__ == "1.0.0"

    # Test that modules can be imported
    from cscan_processor.data_models import Defect, DefectBounds
    from cscan_processor import CScanProcessor, ProcessingOptions

    # Test data model creation
    defect = Defect(
        id="DEF-001",
        centroid=(1.0, 2.0),
        area=6,
        max_amplitude=0.7,
        bounds=DefectBounds(min_x=0, max_x=2, min_y=1, max_y=3)
    )

    assert defect.area == 6
    assert defect.bounds.height == 3
    assert CScanProcessor is not None
    assert ProcessingOptions(width=1, height=1).colormap == "jet"


@pytest.mark.parametrize("content", [
    "detection:\n  min_defect_area: null\n",
    "detection:\n  min_defect_area: many\n",
    "synthetic:\n  noise_level: loud\n",
    "- just\n- a list\n",
    "processing: 5\n",
])
def test_invalid_config_file_values(tmp_path, content):
    """Test that malformed values in a file raise ConfigurationError."""
    path = tmp_path / "invalid.yaml"
    path.write_text(content)

    with pytest.raises(ConfigurationError):
        ConfigManager(str(path))


def test_empty_config_sections(tmp_path):
    """Test that empty sections fall back to defaults."""
    path = tmp_path / "sparse.yaml"
    path.write_text("detection:\nprocessing:\n  colormap: jet\n")

    config = ConfigManager(str(path))

    assert config.get_detection_params() == {}
    assert config.get_synthetic_params() == {}

    config.set('detection.min_defect_area', 3)
    assert config.get('detection.min_defect_area') == 3
