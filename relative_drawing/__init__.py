"""
relative_drawing: declarative 2-D diagrams laid out from relative constraints.

Shapes are placed relative to each other (right of, left of, above, below,
connected by lines); a Drawing resolves the constraints into explicit
coordinates and renders SVG. The command-line driver is main.py.
"""

from relative_drawing.drawing import Arrowhead, Drawing, LineEnding, LineEndingType
from relative_drawing.errors import DrawingError, UnsupportedOperationError
from relative_drawing.geometry import Point, PortSide
from relative_drawing.logging_config import (
    LogContext,
    configure_default_logging,
    get_logger,
    log_timing,
    setup_logging,
    timed,
)
from relative_drawing.numeric import ExactDecimal, Measure, Unit
from relative_drawing.shapes import (
    Circle,
    Line,
    LineEnd,
    Orientation,
    Port,
    Rectangle,
    Shape,
    Text,
)

__all__ = [
    "Arrowhead",
    "Circle",
    "Drawing",
    "DrawingError",
    "ExactDecimal",
    "Line",
    "LineEnd",
    "LineEnding",
    "LineEndingType",
    "LogContext",
    "Measure",
    "Orientation",
    "Point",
    "Port",
    "PortSide",
    "Rectangle",
    "Shape",
    "Text",
    "Unit",
    "UnsupportedOperationError",
    "configure_default_logging",
    "get_logger",
    "log_timing",
    "setup_logging",
    "timed",
]
