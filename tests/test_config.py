"""Tests for config.py module."""

import math

import pytest

from bubblemap.config import DEFAULT_CONFIG, LayoutConfig, load_config, read_yaml
from bubblemap.errors import ConfigError


class TestLayoutConfig:
    """Tests for LayoutConfig defaults and overrides."""

    def test_defaults(self):
        config = LayoutConfig()

        assert config.ring_step == 170.0
        assert config.min_gap == 22.0
        assert config.max_iterations == 80
        assert config.raster_scale == 2
        assert config.line_height == 17
        assert len(config.palette) == 6
        assert math.isclose(config.max_sector_spread, math.pi / 1.7)

    def test_font(self):
        font = DEFAULT_CONFIG.font
        assert font.size == 13
        assert font.weight == 800
        assert "Inter" in font.family

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.ring_step = 10

    def test_replace(self):
        config = DEFAULT_CONFIG.replace(min_gap=5.0)
        assert config.min_gap == 5.0
        assert DEFAULT_CONFIG.min_gap == 22.0

    def test_from_dict_dash_keys(self):
        config = LayoutConfig.from_dict({"ring-step": 120, "level_radii": [50, 40, 30]})
        assert config.ring_step == 120
        assert config.level_radii == (50, 40, 30)

    def test_from_dict_palette(self):
        config = LayoutConfig.from_dict({"palette": [["#000", "#111"], ["#222", "#333"]]})
        assert config.palette == (("#000", "#111"), ("#222", "#333"))

    def test_from_dict_empty(self):
        assert LayoutConfig.from_dict(None) == DEFAULT_CONFIG
        assert LayoutConfig.from_dict({}) == DEFAULT_CONFIG

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="ring_stepp"):
            LayoutConfig.from_dict({"ring_stepp": 3})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"ring_step": 0},
            {"max_iterations": -1},
            {"max_lines": 0},
            {"raster_scale": 0},
            {"palette": [["#000"]]},
            {"wrap_widths": []},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            LayoutConfig.from_dict(overrides)

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"ring-step": "wide"}, "ring_step"),
            ({"max-iterations": 2.5}, "max_iterations"),
            ({"font-size": True}, "font_size"),
            ({"font-family": 12}, "font_family"),
            ({"font-path": ["a.ttf"]}, "font_path"),
            ({"level-radii": [50, "big"]}, "level_radii"),
            ({"wrap-widths": 120}, "wrap_widths"),
            ({"palette": "#000"}, "palette"),
            ({"palette": [["#000", 1]]}, "palette"),
        ],
    )
    def test_wrong_types(self, overrides, field):
        with pytest.raises(ConfigError, match=field):
            LayoutConfig.from_dict(overrides)

    def test_int_accepted_for_float_field(self):
        assert LayoutConfig.from_dict({"min-gap": 10}).min_gap == 10

    def test_validate_checks_replaced_values(self):
        with pytest.raises(ConfigError, match="raster_scale"):
            DEFAULT_CONFIG.replace(raster_scale="2").validate()


class TestLoadConfig:
    """Tests for YAML config loading."""

    def test_layout_section(self, tmp_path):
        path = tmp_path / "bubblemap.yaml"
        path.write_text("output: out\nlayout:\n  ring-step: 150\n  min-gap: 18\n")

        config = load_config(path)

        assert config.ring_step == 150
        assert config.min_gap == 18
        assert config.font_size == DEFAULT_CONFIG.font_size

    def test_no_layout_section(self, tmp_path):
        path = tmp_path / "bubblemap.yaml"
        path.write_text("output: out\n")
        assert load_config(path) == DEFAULT_CONFIG

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert read_yaml(path) == {}

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            read_yaml(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("layout: [unclosed\n")
        with pytest.raises(ConfigError):
            read_yaml(path)
