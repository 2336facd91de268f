"""Layout and styling configuration."""

import dataclasses
import math
from dataclasses import dataclass, fields
from pathlib import Path

from .errors import ConfigError

# Gradient (start, end) per top-level branch
BRANCH_COLORS: tuple[tuple[str, str], ...] = (
    ("#6366f1", "#14b8a6"),  # indigo -> teal
    ("#f59e0b", "#ef4444"),  # amber -> red
    ("#22d3ee", "#a78bfa"),  # cyan -> violet
    ("#34d399", "#f472b6"),  # green -> pink
    ("#60a5fa", "#10b981"),  # blue -> emerald
    ("#eab308", "#f97316"),  # yellow -> orange
)

FONT_FAMILY = 'Inter, ui-sans-serif, system-ui, -apple-system, "Segoe UI", Roboto, Arial, "Noto Sans"'


@dataclass(frozen=True)
class FontSpec:
    """Font used both for measuring labels and for drawing them."""

    family: str
    size: int
    weight: int = 400

    @property
    def css(self) -> str:
        return f"{self.weight} {self.size}px {self.family}"


@dataclass(frozen=True)
class LayoutConfig:
    """Every spacing, sizing and styling constant used by the pipeline."""

    ring_step: float = 170.0
    level_radii: tuple[int, ...] = (68, 48, 38, 32, 28, 24)  # Last entry applies to deeper levels
    min_gap: float = 22.0  # Between bubble edges
    font_family: str = FONT_FAMILY
    font_size: int = 13
    font_weight: int = 800
    font_path: str | None = None  # TrueType file used for measurement
    line_spacing: int = 4
    wrap_widths: tuple[int, ...] = (170, 145, 125, 115)  # Last entry applies to deeper levels
    pad_x: int = 18
    pad_y: int = 16
    max_lines: int = 3
    palette: tuple[tuple[str, str], ...] = BRANCH_COLORS
    sector_spread_ratio: float = 0.78
    max_sector_spread: float = math.pi / 1.7
    max_iterations: int = 80
    link_pull: float = 0.7
    link_width_base: float = 3.8
    link_width_step: float = 0.45
    link_width_min: float = 1.6
    canvas_padding: int = 160
    min_canvas_width: int = 1100
    min_canvas_height: int = 760
    raster_scale: int = 2

    @property
    def font(self) -> FontSpec:
        return FontSpec(self.font_family, self.font_size, self.font_weight)

    @property
    def line_height(self) -> int:
        return self.font_size + self.line_spacing

    def replace(self, **overrides) -> "LayoutConfig":
        """Return a copy with some fields changed."""
        return dataclasses.replace(self, **overrides)

    @classmethod
    def from_dict(cls, data: dict | None) -> "LayoutConfig":
        """Build a config from a plain mapping, e.g. parsed YAML.

        Keys may use dashes or underscores. Lists are converted to tuples.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ConfigError(f"Unknown config key: {key}")
            if isinstance(value, list):
                value = tuple(tuple(item) if isinstance(item, list) else item for item in value)
            values[name] = value

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Check value types and the ranges the pipeline relies on."""
        for f in fields(self):
            _check_type(f.name, getattr(self, f.name), f.default)

        if self.ring_step <= 0:
            raise ConfigError("ring_step must be positive")
        if self.min_gap < 0:
            raise ConfigError("min_gap must not be negative")
        if self.max_iterations < 0:
            raise ConfigError("max_iterations must not be negative")
        if self.max_lines < 1:
            raise ConfigError("max_lines must be at least 1")
        if self.raster_scale <= 0:
            raise ConfigError("raster_scale must be positive")
        if not self.level_radii or not self.wrap_widths:
            raise ConfigError("level_radii and wrap_widths must not be empty")
        if not self.palette or any(len(pair) != 2 for pair in self.palette):
            raise ConfigError("palette must be a non-empty list of [start, end] colour pairs")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_type(name: str, value, default) -> None:
    """Raise ConfigError unless ``value`` is the same kind of value as ``default``."""
    if default is None:
        ok, expected = value is None or isinstance(value, str), "a path"
    elif isinstance(default, float):
        ok, expected = _is_number(value), "a number"
    elif isinstance(default, int):
        ok, expected = isinstance(value, int) and not isinstance(value, bool), "an integer"
    elif isinstance(default, str):
        ok, expected = isinstance(value, str), "a string"
    elif isinstance(default[0], tuple):
        ok = isinstance(value, tuple) and all(
            isinstance(pair, tuple) and all(isinstance(c, str) for c in pair) for pair in value
        )
        expected = "a list of [start, end] colour pairs"
    else:
        ok, expected = isinstance(value, tuple) and all(_is_number(v) for v in value), "a list of numbers"
    if not ok:
        raise ConfigError(f"{name} must be {expected}, got {value!r}")


DEFAULT_CONFIG = LayoutConfig()


def read_yaml(config_path: Path) -> dict:
    """Load a YAML config file into a dictionary.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values (empty for an empty file).
    """
    try:
        import yaml
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err

    with open(config_path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as err:
            raise ConfigError(f"Invalid YAML in {config_path}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")
    return data


def load_config(config_path: Path) -> LayoutConfig:
    """Build the layout config from the ``layout`` section of a YAML file.

    Example::

        output: results
        formats: [svg, png]
        layout:
          ring-step: 150
          min-gap: 18
    """
    return LayoutConfig.from_dict(read_yaml(config_path).get("layout"))
