"""
Pytest configuration and fixtures for relative_drawing.

Provides:
- Global state isolation (config constants, package logger)
- Drawing and shape fixtures for layout tests
- Marker and SVG assertion helpers
"""

import logging
import re
from pathlib import Path
from typing import Callable, List

import pytest

from relative_drawing import config as cfg
from relative_drawing.drawing.drawing import Drawing
from relative_drawing.logging_config import PACKAGE_LOGGER
from relative_drawing.shapes.circle import Circle

PROJECT_ROOT = Path(__file__).parent.parent

# <marker ...>\n<figure ... />\n</marker> in natural-size output
NATURAL_MARKER_PATTERN = re.compile(
    r"<marker id='(?P<id>[A-Z_]+(?:-\d+)?)' orient='auto' "
    r"viewBox='0 0 (?P<vw>[\d.]+) (?P<vh>[\d.]+)' "
    r"markerWidth='(?P<mw>[\d.]+)' markerHeight='(?P<mh>[\d.]+)' "
    r"refX='(?P<rx>[\d.]+)' refY='(?P<ry>[\d.]+)'>\n"
    r"<(?P<tag>path|circle|ellipse) (?P<attrs>[^>]*) />\n"
    r"</marker>"
)


# ============================================================================
# Global State Isolation
# ============================================================================

@pytest.fixture(autouse=True)
def restore_config_constants():
    """Undo changes made to relative_drawing.config by a test."""
    saved = {name: getattr(cfg, name) for name in dir(cfg) if name.isupper()}
    yield
    for name, value in saved.items():
        setattr(cfg, name, value)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers installed by setup_logging() during a test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


# ============================================================================
# Layout Fixtures
# ============================================================================

@pytest.fixture
def drawing() -> Drawing:
    """Empty drawing without explicit dimensions."""
    return Drawing()


@pytest.fixture
def make_circles(drawing: Drawing) -> Callable[[int], List[Circle]]:
    """Factory adding `n` unconstrained circles to the `drawing` fixture."""
    def make(n: int) -> List[Circle]:
        circles = [Circle() for _ in range(n)]
        for circle in circles:
            drawing.add(circle)
        return circles
    return make


@pytest.fixture
def tmp_svg_path(tmp_path: Path) -> Path:
    """Temporary path for SVG output."""
    return tmp_path / "output.svg"


# ============================================================================
# Assertion Helpers
# ============================================================================

def strip_marker_ids(svg: str) -> str:
    """Replace numbered marker ids so markup can be compared across instances."""
    return re.sub(r"([A-Z_]+)-\d+", r"\1-N", svg)


def assert_close(actual, expected: float, tolerance: float = 1e-9) -> None:
    """Assert that a numeric value (ExactDecimal, str or float) is near `expected`."""
    value = float(actual)
    assert abs(value - expected) <= tolerance, f"expected {expected}, got {value}"
