"""
Data Models for C-Scan Processing

Defines all data structures used throughout the pipeline.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np

from .exceptions import ConfigurationError, InvalidArgumentError, ResourceError


AmplitudeGrid = Union[np.ndarray, Sequence[Optional[Sequence[Optional[float]]]]]


class ColormapKind(str, Enum):
    """Named colormaps available to the colorizer."""
    JET = "jet"
    VIRIDIS = "viridis"
    GRAYSCALE = "grayscale"
    THERMAL = "thermal"

    @classmethod
    def from_name(cls, name: Union[str, "ColormapKind"]) -> "ColormapKind":
        """
        Resolve a colormap by name.

        Args:
            name: Colormap name or kind

        Returns:
            Matching colormap kind

        Raises:
            ConfigurationError: If the name is not a known colormap
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            known = ", ".join(kind.value for kind in cls)
            raise ConfigurationError(f"Unknown colormap '{name}' (expected one of: {known})")


class InterpolationMode(str, Enum):
    """Color space in which colormap stops are blended."""
    LAB = "lab"
    RGB = "rgb"


@dataclass
class ProcessingOptions:
    """Options controlling the normalize/smooth/threshold/colorize pipeline."""
    width: int
    height: int
    threshold: Optional[float] = None  # binarize when present
    smoothing: bool = False
    normalize: bool = True
    colormap: str = ColormapKind.JET.value

    def validate(self) -> None:
        """
        Check output dimensions and colormap selection.

        Raises:
            InvalidArgumentError: If width or height is not a positive integer,
                or threshold is neither None nor a real number
            ConfigurationError: If the colormap name is unknown
        """
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
        threshold = self.threshold
        if threshold is not None and (isinstance(threshold, bool)
                                      or not isinstance(threshold, (int, float, np.integer, np.floating))):
            raise InvalidArgumentError(f"threshold must be a number or None, got {threshold!r}")
        ColormapKind.from_name(self.colormap)

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "threshold": self.threshold,
            "smoothing": self.smoothing,
            "normalize": self.normalize,
            "colormap": ColormapKind.from_name(self.colormap).value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProcessingOptions":
        """Create options from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        missing = [key for key in ("width", "height") if key not in data]
        if missing:
            raise InvalidArgumentError(f"Processing options missing required keys: {', '.join(missing)}")
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class RasterImage:
    """RGBA raster produced by the colorizer."""
    pixels: np.ndarray  # (height, width, 4) uint8, RGBA

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Return the RGBA value at column x, row y."""
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def to_bgr(self) -> np.ndarray:
        """Convert to an OpenCV-ordered BGR image (alpha dropped)."""
        return cv2.cvtColor(self.pixels, cv2.COLOR_RGBA2BGR)

    def encode_png(self) -> bytes:
        """
        Encode the raster as PNG.

        Returns:
            PNG file contents

        Raises:
            ResourceError: If the image cannot be encoded
        """
        try:
            ok, buffer = cv2.imencode(".png", cv2.cvtColor(self.pixels, cv2.COLOR_RGBA2BGRA))
        except cv2.error as e:
            raise ResourceError(f"Failed to encode {self.width}x{self.height} raster: {e}") from e
        if not ok:
            raise ResourceError(f"Failed to encode {self.width}x{self.height} raster")
        return buffer.tobytes()


@dataclass(frozen=True)
class DefectBounds:
    """Inclusive bounding box of a defect in grid coordinates (x = column, y = row)."""
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


@dataclass(frozen=True)
class Defect:
    """Detected flaw candidate."""
    id: str  # DEF-001, DEF-002, ... in discovery order
    centroid: Tuple[float, float]  # (x, y)
    area: int  # pixel count
    max_amplitude: float
    bounds: DefectBounds

    def to_dict(self) -> Dict[str, Any]:
        """Convert defect to a plain dictionary for reporting."""
        return {
            "id": self.id,
            "centroid": [self.centroid[0], self.centroid[1]],
            "area": self.area,
            "max_amplitude": self.max_amplitude,
            "bounds": {
                "min_x": self.bounds.min_x,
                "max_x": self.bounds.max_x,
                "min_y": self.bounds.min_y,
                "max_y": self.bounds.max_y,
            },
        }


@dataclass(frozen=True)
class SyntheticBlob:
    """Ground truth for one blob placed by the synthetic data generator."""
    center_x: int
    center_y: int
    radius: int
    amplitude: float


@dataclass
class ScanAnalysis:
    """Results from colorizing and inspecting one scan."""
    image: RasterImage
    defects: List[Defect]
    processed_grid: np.ndarray
    processing_time: float
    summary: Dict[str, float] = field(default_factory=dict)
