"""
Unit tests for relative_drawing.project_config.

Tests:
- Section defaults
- JSON round trip and partial files
- Config file discovery and fallback
- Merging and applying to relative_drawing.config
"""

import json
import logging

import pytest

from relative_drawing import config as cfg
from relative_drawing.drawing.drawing import Drawing
from relative_drawing.project_config import (
    CONFIG_FILENAME,
    LayoutConfig,
    MarkersConfig,
    NumericConfig,
    OutputConfig,
    ProjectConfig,
    apply_config_to_globals,
    create_sample_config,
    find_config_file,
    load_config,
    merge_configs,
)
from relative_drawing.shapes import Circle, Text


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Working directory and home directory without config files."""
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    return work, home


class TestSections:
    """Tests for the section dataclasses."""

    def test_defaults_match_config_module(self):
        """Test section defaults equal the built-in constants."""
        assert NumericConfig().division_precision == cfg.DIVISION_PRECISION
        assert LayoutConfig().natural_unit == cfg.NATURAL_UNIT
        assert LayoutConfig().text_char_width == cfg.TEXT_CHAR_WIDTH
        assert MarkersConfig().arrowhead_fill == cfg.ARROWHEAD_FILL
        assert MarkersConfig().decimal_places == cfg.MARKER_DECIMAL_PLACES
        assert OutputConfig().decimal_places == cfg.OUTPUT_DECIMAL_PLACES

    def test_output_size_unset(self):
        """Test no default canvas size is configured."""
        output = OutputConfig()
        assert output.width is None
        assert output.height is None


class TestSerialization:
    """Tests for dict and JSON conversion."""

    def test_round_trip(self):
        """Test to_json / from_json keeps every value."""
        config = ProjectConfig()
        config.output.width = 300
        config.markers.arrowhead_fill = "blue"
        restored = ProjectConfig.from_json(config.to_json())
        assert restored == config

    def test_partial_dict(self):
        """Test missing sections and keys keep their defaults."""
        config = ProjectConfig.from_dict({"layout": {"text_char_width": 0.5}})
        assert config.layout.text_char_width == 0.5
        assert config.layout.natural_unit == 1
        assert config.output == OutputConfig()

    def test_comments_and_unknown_keys_ignored(self):
        """Test '_' keys, unknown keys and unknown sections are skipped."""
        config = ProjectConfig.from_dict({
            "_comment": "top",
            "numeric": {"_comment": "digits", "division_precision": 20, "bogus": 1},
            "unknown": {"x": 1},
        })
        assert config.numeric.division_precision == 20
        assert not hasattr(config.numeric, "bogus")

    def test_save_and_load(self, tmp_path):
        """Test save() writes a file that load() reads back."""
        path = tmp_path / CONFIG_FILENAME
        config = ProjectConfig()
        config.output.output_dir = "out"
        config.save(path)
        assert ProjectConfig.load(path).output.output_dir == "out"


class TestDiscovery:
    """Tests for find_config_file() and load_config()."""

    def test_nothing_found(self, isolated_dirs):
        """Test None when no file exists anywhere."""
        assert find_config_file() is None
        assert load_config() == ProjectConfig()

    def test_explicit_path(self, isolated_dirs, tmp_path):
        """Test an existing explicit path wins."""
        explicit = tmp_path / "custom.json"
        explicit.write_text("{}", encoding="utf-8")
        assert find_config_file(explicit_config=explicit) == explicit

    def test_missing_explicit_path_falls_back(self, isolated_dirs, caplog):
        """Test a missing explicit path is reported and the search continues."""
        work, _ = isolated_dirs
        (work / CONFIG_FILENAME).write_text("{}", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="relative_drawing"):
            found = find_config_file(explicit_config=work / "missing.json")
        assert found == work / CONFIG_FILENAME
        assert "Explicit config not found" in caplog.text

    def test_output_directory_before_cwd(self, isolated_dirs, tmp_path):
        """Test the file next to the output diagram takes precedence."""
        work, _ = isolated_dirs
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        (work / CONFIG_FILENAME).write_text("{}", encoding="utf-8")
        (out_dir / CONFIG_FILENAME).write_text("{}", encoding="utf-8")
        assert find_config_file(diagram_path=out_dir / "d.svg") == out_dir / CONFIG_FILENAME

    def test_home_directory(self, isolated_dirs):
        """Test the home directory is searched last."""
        _, home = isolated_dirs
        (home / CONFIG_FILENAME).write_text("{}", encoding="utf-8")
        assert find_config_file() == home / CONFIG_FILENAME

    def test_malformed_file_uses_defaults(self, isolated_dirs, caplog):
        """Test invalid JSON is logged and replaced by defaults."""
        work, _ = isolated_dirs
        (work / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.ERROR, logger="relative_drawing"):
            config = load_config()
        assert config == ProjectConfig()
        assert "Failed to load config" in caplog.text


class TestMerge:
    """Tests for merge_configs()."""

    def test_override_non_defaults(self):
        """Test only values changed in the override are taken."""
        base = ProjectConfig()
        base.output.width = 100
        base.layout.text_char_width = 0.5
        override = ProjectConfig()
        override.output.width = 400
        merged = merge_configs(base, override)
        assert merged.output.width == 400
        assert merged.layout.text_char_width == 0.5
        assert base.output.width == 100


class TestApplyToGlobals:
    """Tests for apply_config_to_globals()."""

    def test_constants_updated(self):
        """Test config values land in relative_drawing.config."""
        config = ProjectConfig()
        config.numeric.division_precision = 12
        config.markers.arrowhead_fill = "green"
        config.output.decimal_places = 2
        apply_config_to_globals(config)
        assert cfg.DIVISION_PRECISION == 12
        assert cfg.ARROWHEAD_FILL == "green"
        assert cfg.OUTPUT_DECIMAL_PLACES == 2

    def test_output_places_affect_rendering(self):
        """Test fewer decimal places shorten rendered coordinates."""
        config = ProjectConfig()
        config.output.decimal_places = 2
        apply_config_to_globals(config)
        drawing = Drawing()
        circles = [Circle() for _ in range(3)]
        for circle in circles:
            drawing.add(circle)
        circles[1].set_right_of(circles[0])
        circles[2].set_right_of(circles[1])
        assert 'cx="83.33"' in drawing.render(100, 100)

    def test_text_width_heuristic(self):
        """Test the text width per character is configurable."""
        config = ProjectConfig()
        config.layout.text_char_width = 0.5
        apply_config_to_globals(config)
        assert Text("abcd").implicit_width == 2


class TestSampleConfig:
    """Tests for create_sample_config()."""

    def test_sample_is_loadable(self, tmp_path):
        """Test the sample has comments and loads to the defaults."""
        path = create_sample_config(tmp_path / CONFIG_FILENAME)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "_comment" in data
        assert "_comment" in data["markers"]
        assert ProjectConfig.load(path) == ProjectConfig()
