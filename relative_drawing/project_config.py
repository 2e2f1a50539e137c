"""
JSON project configuration for relative_drawing.

Configuration hierarchy (later overrides earlier):
1. Built-in defaults (config.py)
2. User config (~/.reldraw.json)
3. Project config (./.reldraw.json, or next to the output file)
4. CLI arguments

Example .reldraw.json:
{
    "numeric": {"division_precision": 64},
    "layout": {"natural_unit": 1, "text_char_width": 0.25},
    "markers": {"line_ending_fill": "black", "arrowhead_fill": "red"},
    "output": {"decimal_places": 6, "width": 100, "height": 100,
               "output_dir": "out"}
}
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".reldraw.json"


@dataclass
class NumericConfig:
    """Exact arithmetic settings."""
    division_precision: int = 64  # significant digits kept by divisions


@dataclass
class LayoutConfig:
    """Layout settings."""
    natural_unit: float = 1  # explicit units per implicit unit at natural size
    text_char_width: float = 0.25  # implicit width per character of text


@dataclass
class MarkersConfig:
    """Default colors and precision of line decorations."""
    line_stroke: str = "black"
    line_ending_fill: str = "black"
    line_ending_open_fill: str = "white"
    line_ending_stroke: str = "black"
    arrowhead_fill: str = "red"
    decimal_places: int = 13


@dataclass
class OutputConfig:
    """Rendered output settings."""
    decimal_places: int = 6
    width: Optional[float] = None  # None = natural size unless given on the CLI
    height: Optional[float] = None
    output_dir: str = ""
    prefix: str = ""


SECTIONS = {
    'numeric': NumericConfig,
    'layout': LayoutConfig,
    'markers': MarkersConfig,
    'output': OutputConfig,
}


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    numeric: NumericConfig = field(default_factory=NumericConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    markers: MarkersConfig = field(default_factory=MarkersConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Write the configuration as JSON."""
        path = Path(path)
        path.write_text(self.to_json(), encoding='utf-8')
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Build a configuration from a (possibly partial) dictionary.

        Unknown sections and keys, including "_comment" entries, are ignored.
        """
        config = cls()
        for section_name in SECTIONS:
            values = data.get(section_name)
            if not isinstance(values, dict):
                continue
            section = getattr(config, section_name)
            for key, value in values.items():
                if key.startswith('_'):
                    continue
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.debug("Ignoring unknown config key %s.%s", section_name, key)
        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'ProjectConfig':
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ProjectConfig':
        """Load a configuration file.

        Raises:
            FileNotFoundError: If the file does not exist
            json.JSONDecodeError: If the file is not valid JSON
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.info("Configuration loaded from %s", path)
        return cls.from_dict(data)


def find_config_file(
    diagram_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Locate the configuration file.

    Search order:
    1. Explicit config path (if it exists)
    2. .reldraw.json in the directory of the output diagram
    3. .reldraw.json in the current working directory
    4. ~/.reldraw.json

    Returns:
        Path of the first file found, or None
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    candidates = []
    if diagram_path:
        candidates.append(Path(diagram_path).parent / CONFIG_FILENAME)
    candidates.append(Path.cwd() / CONFIG_FILENAME)
    candidates.append(Path.home() / CONFIG_FILENAME)

    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def load_config(
    diagram_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> ProjectConfig:
    """Load the configuration, falling back to defaults.

    An unreadable or malformed file is logged and replaced by defaults.
    """
    config_path = find_config_file(diagram_path, explicit_config)
    if config_path:
        try:
            return ProjectConfig.load(config_path)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)
    return ProjectConfig()


def merge_configs(base: ProjectConfig, override: ProjectConfig) -> ProjectConfig:
    """Merge two configurations; non-default values of `override` win."""
    merged = ProjectConfig.from_dict(base.to_dict())
    for section_name, section_type in SECTIONS.items():
        defaults = section_type()
        target = getattr(merged, section_name)
        source = getattr(override, section_name)
        for item in fields(section_type):
            value = getattr(source, item.name)
            if value != getattr(defaults, item.name):
                setattr(target, item.name, value)
    return merged


def apply_config_to_globals(config: ProjectConfig) -> None:
    """Copy configuration values into relative_drawing.config.

    Library code reads those constants at call time, so this affects every
    drawing rendered afterwards.
    """
    from relative_drawing import config as cfg

    cfg.DIVISION_PRECISION = int(config.numeric.division_precision)

    cfg.NATURAL_UNIT = config.layout.natural_unit
    cfg.TEXT_CHAR_WIDTH = config.layout.text_char_width

    cfg.LINE_STROKE = config.markers.line_stroke
    cfg.LINE_ENDING_FILL = config.markers.line_ending_fill
    cfg.LINE_ENDING_OPEN_FILL = config.markers.line_ending_open_fill
    cfg.LINE_ENDING_STROKE = config.markers.line_ending_stroke
    cfg.ARROWHEAD_FILL = config.markers.arrowhead_fill
    cfg.MARKER_DECIMAL_PLACES = int(config.markers.decimal_places)

    cfg.OUTPUT_DECIMAL_PLACES = int(config.output.decimal_places)

    logger.debug("Applied project config to global constants")


def create_sample_config(path: Union[str, Path] = CONFIG_FILENAME) -> Path:
    """Write a commented sample configuration file.

    Returns:
        Path written
    """
    sample: Dict[str, Any] = {
        "_comment": "relative_drawing configuration",
        "_version": "1.0",
    }
    notes = {
        'numeric': "Significant digits of layout divisions (truncated)",
        'layout': "Natural-size unit and text width heuristic",
        'markers': "Default colors and decimal places of line decorations",
        'output': "Coordinate decimal places, default canvas size, output location",
    }
    for section_name, section_type in SECTIONS.items():
        sample[section_name] = {"_comment": notes[section_name], **asdict(section_type())}

    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample, f, indent=2, ensure_ascii=False)
    logger.info("Sample configuration created: %s", path)
    return path
