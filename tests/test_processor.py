"""
Integration tests for the C-Scan processing pipeline
"""

import pytest
import numpy as np

from cscan_processor.data_models import ProcessingOptions, RasterImage, ScanAnalysis
from cscan_processor.exceptions import ConfigurationError, InvalidArgumentError
from cscan_processor.processor import CScanProcessor
from cscan_processor.rendering.colormaps import get_colormap


class TestCScanProcessor:
    """Test suite for the pipeline facade."""

    @pytest.fixture
    def processor(self):
        """Fixture providing a processor instance."""
        return CScanProcessor()

    def test_process_returns_raster(self, processor, random_grid):
        """Test that process renders at the requested resolution."""
        image = processor.process(random_grid, ProcessingOptions(width=200, height=150))

        assert isinstance(image, RasterImage)
        assert image.pixels.shape == (150, 200, 4)
        assert np.all(image.pixels[:, :, 3] == 255)

    def test_process_accepts_dict_options(self, processor, random_grid):
        """Test that options may be given as a dictionary."""
        image = processor.process(random_grid, {"width": 64, "height": 32, "colormap": "thermal",
                                                "unused": True})

        assert (image.width, image.height) == (64, 32)

    def test_unknown_colormap_is_not_replaced(self, processor, random_grid):
        """Test that an unknown colormap fails instead of silently using jet."""
        with pytest.raises(ConfigurationError):
            processor.process(random_grid, ProcessingOptions(width=10, height=10, colormap="hot"))

    def test_invalid_dimensions(self, processor, random_grid):
        """Test that non-positive output sizes are rejected."""
        with pytest.raises(InvalidArgumentError):
            processor.process(random_grid, ProcessingOptions(width=0, height=10))

    def test_constant_grid_scenario(self, processor, constant_grid):
        """Test that normalizing a constant grid returns it unchanged."""
        processed = processor.prepare_grid(constant_grid, ProcessingOptions(width=5, height=5, normalize=True))

        np.testing.assert_array_equal(processed, constant_grid)
        assert not np.any(np.isnan(processed))

        image = processor.process(constant_grid, ProcessingOptions(width=5, height=5, colormap="grayscale"))
        expected = get_colormap("grayscale")(0.5)
        assert all(image.pixel(x, y)[:3] == expected for x in range(5) for y in range(5))

    def test_normalization_applied(self, processor):
        """Test that normalize rescales before colorization."""
        grid = [[10.0, 20.0]]

        processed = processor.prepare_grid(grid, ProcessingOptions(width=2, height=1))
        np.testing.assert_array_equal(processed, [[0.0, 1.0]])

        raw = processor.prepare_grid(grid, ProcessingOptions(width=2, height=1, normalize=False))
        np.testing.assert_array_equal(raw, [[10.0, 20.0]])

    def test_stage_order(self, processor):
        """Test normalize -> smooth -> threshold ordering."""
        grid = np.zeros((5, 5))
        grid[2, 2] = 8.0
        options = ProcessingOptions(width=5, height=5, smoothing=True, threshold=0.2)

        processed = processor.prepare_grid(grid, options)

        # Normalized impulse 1.0 smoothed to 0.25 at the center, 0.125 beside it
        expected = np.zeros((5, 5))
        expected[2, 2] = 1.0
        np.testing.assert_array_equal(processed, expected)

    def test_threshold_produces_binary_image(self, processor, random_grid):
        """Test that a thresholded grid renders only the two end colors."""
        image = processor.process(random_grid, ProcessingOptions(width=60, height=40, threshold=0.5,
                                                                 colormap="grayscale"))

        colors = {tuple(c) for c in image.pixels[:, :, :3].reshape(-1, 3)}
        assert colors == {(0, 0, 0), (255, 255, 255)}

    def test_process_does_not_mutate_input(self, processor, random_grid):
        """Test that the caller's grid is untouched by the full pipeline."""
        original = random_grid.copy()
        processor.process(random_grid, ProcessingOptions(width=30, height=30, smoothing=True, threshold=0.4))

        np.testing.assert_array_equal(random_grid, original)

    def test_detect_defects(self, processor, single_blob_grid):
        """Test the detection operation end to end."""
        defects = processor.detect_defects(single_blob_grid, 0.5)

        assert len(defects) == 1
        assert defects[0].area == 9

    def test_detect_defects_requires_threshold(self, processor, single_blob_grid):
        """Test that detection without a threshold is a caller error."""
        with pytest.raises(InvalidArgumentError):
            processor.detect_defects(single_blob_grid, None)

    def test_detect_defects_uses_fixed_minimum_area(self, config_manager):
        """Test that detect_defects keeps the five-cell cutoff whatever the configuration."""
        config_manager.set('detection.min_defect_area', 1)
        processor = CScanProcessor(config_manager)
        grid = np.zeros((6, 6))
        grid[0, 0] = 1.0
        grid[2:4, 2:5] = 1.0  # six cells

        defects = processor.detect_defects(grid, 0.5)

        assert [d.area for d in defects] == [6]

    def test_analyze(self, processor, two_blob_grid):
        """Test combined colorization and detection."""
        result = processor.analyze(two_blob_grid, ProcessingOptions(width=50, height=50, threshold=0.5))

        assert isinstance(result, ScanAnalysis)
        assert result.image.pixels.shape == (50, 50, 4)
        assert [d.id for d in result.defects] == ["DEF-001", "DEF-002"]
        assert result.summary['defect_count'] == 2
        assert result.processing_time >= 0.0
        # Detection ran on the continuous grid, so it is not binarized
        assert result.processed_grid.max() == 1.0

    def test_analyze_requires_threshold(self, processor, random_grid):
        """Test that analysis without a threshold is a caller error."""
        with pytest.raises(InvalidArgumentError):
            processor.analyze(random_grid, ProcessingOptions(width=10, height=10))

    def test_generate_synthetic_data(self, processor):
        """Test seeded synthetic data through the facade."""
        first = processor.generate_synthetic_data(40, 30, defect_count=2, seed=5)
        second = processor.generate_synthetic_data(40, 30, defect_count=2, seed=5)

        assert first.shape == (40, 30)
        np.testing.assert_array_equal(first, second)

    def test_default_options(self, processor):
        """Test options built from configuration defaults."""
        options = processor.default_options(colormap="viridis")

        assert options.width == 512
        assert options.height == 512
        assert options.normalize is True
        assert options.threshold is None
        assert options.colormap == "viridis"

    def test_synthetic_scan_round_trip(self, processor):
        """Test the whole pipeline on generated data with ground truth."""
        grid = processor.generate_synthetic_data(100, 100, defect_count=3, seed=11)

        image = processor.process(grid, ProcessingOptions(width=300, height=300, smoothing=True))
        defects = processor.detect_defects(grid, 0.3)

        assert image.pixels.shape == (300, 300, 4)
        assert len(defects) >= 1
        assert all(d.area >= 5 and d.max_amplitude > 0.3 for d in defects)


class TestProcessingOptions:
    """Tests for ProcessingOptions dataclass."""

    def test_default_options(self):
        """Test default option values."""
        options = ProcessingOptions(width=100, height=50)

        assert options.threshold is None
        assert options.smoothing is False
        assert options.normalize is True
        assert options.colormap == "jet"

    def test_to_dict(self):
        """Test conversion to dictionary."""
        data = ProcessingOptions(width=10, height=20, threshold=0.3).to_dict()

        assert data == {"width": 10, "height": 20, "threshold": 0.3, "smoothing": False,
                        "normalize": True, "colormap": "jet"}

    def test_from_dict(self):
        """Test creation from dictionary."""
        options = ProcessingOptions.from_dict({"width": 8, "height": 4, "smoothing": True, "extra": 1})

        assert options.width == 8
        assert options.smoothing is True

    def test_validate(self):
        """Test option validation errors."""
        with pytest.raises(ConfigurationError):
            ProcessingOptions(width=10, height=10, colormap="sepia").validate()
        with pytest.raises(InvalidArgumentError):
            ProcessingOptions(width=-1, height=10).validate()
        with pytest.raises(InvalidArgumentError, match="threshold"):
            ProcessingOptions(width=10, height=10, threshold="0.5").validate()

    def test_from_dict_missing_dimensions(self):
        """Test that options without width or height are an argument error."""
        with pytest.raises(InvalidArgumentError, match="width"):
            ProcessingOptions.from_dict({"height": 5})

    def test_process_rejects_bad_options(self, random_grid):
        """Test that malformed option dictionaries fail before any stage runs."""
        processor = CScanProcessor()

        with pytest.raises(InvalidArgumentError):
            processor.process(random_grid, {"height": 5})
        with pytest.raises(InvalidArgumentError):
            processor.process(random_grid, {"width": 5, "height": 5, "threshold": "0.5"})
