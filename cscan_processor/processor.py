"""
C-Scan Processor

Entry point used by the reporting layer: wires normalization, smoothing,
thresholding, colorization and defect detection together.
"""

import time
import numpy as np
from typing import Any, Dict, List, Optional, Union
import logging

from .data_models import AmplitudeGrid, Defect, ProcessingOptions, RasterImage, ScanAnalysis
from .detection.defect_detector import DefectDetector, MIN_DEFECT_AREA
from .exceptions import InvalidArgumentError
from .preprocessing.gaussian_smoother import GaussianSmoother
from .preprocessing.grid_normalizer import GridNormalizer
from .preprocessing.thresholder import Thresholder
from .rendering.colorizer import Colorizer
from .simulation.synthetic_data_generator import SyntheticDataGenerator
from .utils.config_manager import ConfigManager
from .utils.grid_utils import as_amplitude_grid


class CScanProcessor:
    """
    C-Scan image processing and defect detection pipeline.

    Usage:
        processor = CScanProcessor()
        image = processor.process(grid, ProcessingOptions(width=400, height=300))
        defects = processor.detect_defects(grid, threshold=0.5)
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize the processor and its stages.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        self.normalizer = GridNormalizer()
        self.smoother = GaussianSmoother()
        self.thresholder = Thresholder()
        self.colorizer = Colorizer(self.config)
        self.detector = DefectDetector(self.config)

        self.logger.info("C-Scan processor initialized")

    def default_options(self, **overrides: Any) -> ProcessingOptions:
        """Build processing options from the configured defaults."""
        params = dict(self.config.get_processing_params())
        params.update(overrides)
        params.setdefault('width', 512)
        params.setdefault('height', 512)
        return ProcessingOptions.from_dict(params)

    def _resolve_options(self, options: Union[ProcessingOptions, Dict[str, Any]]) -> ProcessingOptions:
        if isinstance(options, dict):
            options = ProcessingOptions.from_dict(options)
        options.validate()
        return options

    def prepare_grid(self,
                     grid: AmplitudeGrid,
                     options: Union[ProcessingOptions, Dict[str, Any]]) -> np.ndarray:
        """
        Run the configured normalize -> smooth -> threshold stages.

        Args:
            grid: Raw amplitude grid
            options: Processing options

        Returns:
            New processed grid
        """
        options = self._resolve_options(options)
        data = as_amplitude_grid(grid)

        if options.normalize:
            data = self.normalizer.normalize(data)

        if options.smoothing:
            data = self.smoother.smooth(data)

        if options.threshold is not None:
            data = self.thresholder.apply(data, options.threshold)

        return data

    def process(self,
                grid: AmplitudeGrid,
                options: Union[ProcessingOptions, Dict[str, Any]]) -> RasterImage:
        """
        Turn a raw amplitude grid into a colorized raster.

        Args:
            grid: Raw amplitude grid
            options: Processing options (dimensions, stages, colormap)

        Returns:
            RGBA raster of options.width x options.height
        """
        options = self._resolve_options(options)
        processed = self.prepare_grid(grid, options)

        return self.colorizer.rasterize(processed, options.width, options.height, options.colormap)

    def detect_defects(self, grid: AmplitudeGrid, threshold: Optional[float]) -> List[Defect]:
        """
        Threshold a grid and report its connected flaw regions.

        Regions smaller than MIN_DEFECT_AREA cells are always discarded here;
        detection.min_defect_area only applies to analyze() and DefectDetector.

        Args:
            grid: Amplitude grid
            threshold: Required detection threshold

        Returns:
            Defects in row-major discovery order
        """
        if threshold is None:
            raise InvalidArgumentError("Defect detection requires a threshold")

        return self.detector.detect(grid, threshold, MIN_DEFECT_AREA)

    def analyze(self,
                grid: AmplitudeGrid,
                options: Union[ProcessingOptions, Dict[str, Any]]) -> ScanAnalysis:
        """
        Colorize a grid and detect defects in it in one call.

        Normalization and smoothing are applied once; the continuous result is
        both colorized and thresholded for detection.
        Regions smaller than detection.min_defect_area are discarded.

        Args:
            grid: Raw amplitude grid
            options: Processing options; threshold is required

        Returns:
            ScanAnalysis with image, defects and summary
        """
        start_time = time.time()
        options = self._resolve_options(options)
        if options.threshold is None:
            raise InvalidArgumentError("Scan analysis requires a detection threshold")

        continuous = self.prepare_grid(
            grid, ProcessingOptions(width=options.width, height=options.height, threshold=None,
                                    smoothing=options.smoothing, normalize=options.normalize,
                                    colormap=options.colormap)
        )

        image = self.colorizer.rasterize(continuous, options.width, options.height, options.colormap)
        defects = self.detector.detect(continuous, options.threshold)

        processing_time = time.time() - start_time
        self.logger.info(f"Analyzed grid {continuous.shape}: {len(defects)} defects "
                         f"in {processing_time:.3f}s")

        return ScanAnalysis(
            image=image,
            defects=defects,
            processed_grid=continuous,
            processing_time=processing_time,
            summary=self.detector.summarize(defects)
        )

    def generate_synthetic_data(self,
                                rows: int,
                                cols: int,
                                defect_count: int = 2,
                                seed: Optional[int] = None,
                                rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """
        Generate a synthetic C-Scan grid for tests and demos.

        Args:
            rows: Number of rows
            cols: Number of columns
            defect_count: Number of blobs
            seed: Seed for reproducible output
            rng: Random generator to draw from; takes precedence over seed

        Returns:
            Grid of shape (rows, cols)
        """
        generator = SyntheticDataGenerator(self.config, seed=seed, rng=rng)
        return generator.generate(rows, cols, defect_count)
