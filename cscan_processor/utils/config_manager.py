"""
Configuration Management System

Handles loading, validation, and management of processing parameters.
"""

import yaml
from typing import Dict, Any, Optional
from pathlib import Path

from ..data_models import ColormapKind, InterpolationMode
from ..exceptions import ConfigurationError


class ConfigManager:
    """Manages configuration parameters for the C-Scan processor."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default config.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.config = self._load_config()
        self._validate_config()

    def _get_default_config_path(self) -> str:
        """Get path to default configuration file."""
        package_dir = Path(__file__).parent.parent
        return str(package_dir / "config" / "default_config.yaml")

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, 'r') as file:
                config = yaml.safe_load(file)
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping, got {type(config).__name__}"
            )
        return config

    def _section(self, name: str) -> Dict[str, Any]:
        """Return a top-level section, treating an empty section as {}."""
        section = self.config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"Configuration section '{name}' must be a mapping")
        return section

    @staticmethod
    def _number(section: Dict[str, Any], name: str, key: str, default: Any, kind: type) -> Any:
        value = section.get(key, default)
        if isinstance(value, bool):
            raise ConfigurationError(f"{name}.{key} must be a number, got {value!r}")
        try:
            return kind(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{name}.{key} must be a number, got {value!r}")

    def _validate_config(self) -> None:
        """Validate configuration parameters for consistency and feasibility."""
        # Validate default output dimensions
        proc = self._section('processing')
        for key in ('width', 'height'):
            value = proc.get(key, 512)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"processing.{key} must be a positive integer")
        ColormapKind.from_name(proc.get('colormap', 'jet'))

        # Validate interpolation mode
        rendering = self._section('rendering')
        mode = rendering.get('interpolation', 'lab')
        if mode not in {m.value for m in InterpolationMode}:
            raise ConfigurationError(f"Unknown interpolation mode: {mode}")

        # Validate detection cutoff
        det = self._section('detection')
        if self._number(det, 'detection', 'min_defect_area', 5, int) < 1:
            raise ConfigurationError("detection.min_defect_area must be at least 1")

        # Validate synthetic blob ranges
        syn = self._section('synthetic')
        min_radius = self._number(syn, 'synthetic', 'min_radius', 5, int)
        max_radius = self._number(syn, 'synthetic', 'max_radius', 15, int)
        if min_radius < 1:
            raise ConfigurationError("synthetic.min_radius must be at least 1")
        if min_radius >= max_radius:
            raise ConfigurationError("synthetic.min_radius must be less than max_radius")
        min_amplitude = self._number(syn, 'synthetic', 'min_amplitude', 0.6, float)
        max_amplitude = self._number(syn, 'synthetic', 'max_amplitude', 1.0, float)
        if min_amplitude > max_amplitude:
            raise ConfigurationError("synthetic.min_amplitude must not exceed max_amplitude")
        if self._number(syn, 'synthetic', 'noise_level', 0.2, float) < 0:
            raise ConfigurationError("synthetic.noise_level must be non-negative")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'processing.colormap')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'detection.min_defect_area')
            value: Value to set
        """
        keys = key.split('.')
        config_ref = self.config

        for k in keys[:-1]:
            if config_ref.get(k) is None:
                config_ref[k] = {}
            config_ref = config_ref[k]

        config_ref[keys[-1]] = value
        self._validate_config()

    def save(self, output_path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            output_path: Path to save configuration. If None, overwrites current file.
        """
        save_path = output_path or self.config_path

        with open(save_path, 'w') as file:
            yaml.dump(self.config, file, default_flow_style=False, indent=2)

    def get_processing_params(self) -> Dict[str, Any]:
        """Get default processing options as a dictionary."""
        return self._section('processing')

    def get_rendering_params(self) -> Dict[str, Any]:
        """Get colormap and overlay rendering parameters as a dictionary."""
        return self._section('rendering')

    def get_detection_params(self) -> Dict[str, Any]:
        """Get defect detection parameters as a dictionary."""
        return self._section('detection')

    def get_synthetic_params(self) -> Dict[str, Any]:
        """Get synthetic data generation parameters as a dictionary."""
        return self._section('synthetic')
