"""
Colormap Strategy Table

Each named colormap is a fixed list of evenly spaced control colors. All of
them share one interpolation function that blends neighbouring stops in
CIE L*a*b* (D65) and converts the result back to sRGB, so equal scalar steps
give roughly equal perceived color steps.
"""

import cv2
import numpy as np
from dataclasses import dataclass
from typing import Dict, Tuple, Union

from ..data_models import ColormapKind, InterpolationMode
from ..exceptions import ConfigurationError


COLORMAP_STOPS: Dict[ColormapKind, Tuple[str, ...]] = {
    # dark blue -> blue -> cyan -> yellow -> red -> dark red
    ColormapKind.JET: ('#000083', '#0000FF', '#00FFFF', '#FFFF00', '#FF0000', '#830000'),
    ColormapKind.VIRIDIS: ('#440154', '#414487', '#2a788e', '#22a884', '#7ad151', '#fde725'),
    ColormapKind.GRAYSCALE: ('#000000', '#FFFFFF'),
    # black -> indigo -> red -> yellow -> white
    ColormapKind.THERMAL: ('#000000', '#4B0082', '#FF0000', '#FFFF00', '#FFFFFF'),
}


def hex_to_rgb(hex_color: str) -> Tuple[float, float, float]:
    """Convert '#RRGGBB' to an sRGB triple in [0, 1]."""
    value = hex_color.lstrip('#')
    if len(value) != 6:
        raise ConfigurationError(f"Invalid color '{hex_color}'")
    try:
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ConfigurationError(f"Invalid color '{hex_color}'")
    return r / 255.0, g / 255.0, b / 255.0


def _rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    image = rgb.astype(np.float32).reshape(-1, 1, 3)
    return cv2.cvtColor(image, cv2.COLOR_RGB2Lab).reshape(-1, 3).astype(np.float64)


def _lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    image = lab.astype(np.float32).reshape(-1, 1, 3)
    return cv2.cvtColor(image, cv2.COLOR_Lab2RGB).reshape(-1, 3).astype(np.float64)


@dataclass(frozen=True)
class Colormap:
    """Ordered control colors plus the color space they are blended in."""
    name: str
    stops: Tuple[str, ...]
    interpolation: InterpolationMode = InterpolationMode.LAB

    def __post_init__(self):
        if len(self.stops) < 2:
            raise ConfigurationError(f"Colormap '{self.name}' needs at least two stops")

    def _stops_in_space(self) -> np.ndarray:
        rgb = np.array([hex_to_rgb(color) for color in self.stops], dtype=np.float64)
        if self.interpolation == InterpolationMode.LAB:
            return _rgb_to_lab(rgb)
        return rgb

    def map(self, values: Union[float, np.ndarray]) -> np.ndarray:
        """
        Map scalars to RGB colors.

        Args:
            values: Scalar or array of scalars; clamped to [0, 1], NaN treated as 0

        Returns:
            uint8 array of shape values.shape + (3,)
        """
        values = np.asarray(values, dtype=np.float64)
        flat = np.clip(np.nan_to_num(values.ravel(), nan=0.0), 0.0, 1.0)
        if flat.size == 0:
            return np.zeros(values.shape + (3,), dtype=np.uint8)

        stops = self._stops_in_space()
        n_segments = len(stops) - 1

        scaled = flat * n_segments
        segment = np.minimum(np.floor(scaled).astype(np.intp), n_segments - 1)
        frac = (scaled - segment)[:, None]

        blended = stops[segment] * (1.0 - frac) + stops[segment + 1] * frac
        if self.interpolation == InterpolationMode.LAB:
            blended = _lab_to_rgb(blended)

        rgb = np.floor(np.clip(blended, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
        return rgb.reshape(values.shape + (3,))

    def __call__(self, value: float) -> Tuple[int, int, int]:
        r, g, b = self.map(np.array([value]))[0]
        return int(r), int(g), int(b)


def get_colormap(name: Union[str, ColormapKind],
                 interpolation: Union[str, InterpolationMode] = InterpolationMode.LAB) -> Colormap:
    """
    Look up a named colormap.

    Args:
        name: One of jet, viridis, grayscale, thermal
        interpolation: Color space used to blend stops ('lab' or 'rgb')

    Returns:
        Colormap for the given name

    Raises:
        ConfigurationError: If the name or interpolation mode is unknown
    """
    kind = ColormapKind.from_name(name)
    try:
        mode = InterpolationMode(interpolation)
    except ValueError:
        raise ConfigurationError(f"Unknown interpolation mode: {interpolation}")
    return Colormap(name=kind.value, stops=COLORMAP_STOPS[kind], interpolation=mode)
