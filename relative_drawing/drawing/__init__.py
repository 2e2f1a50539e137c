"""Drawing container, scale fitting, markers and SVG serialization."""

from relative_drawing.drawing.markers import Arrowhead, LineEnding, LineEndingType
from relative_drawing.drawing.fitting import Resolution, fit_ratio, resolve_layout
from relative_drawing.drawing.svg_renderer import render_svg
from relative_drawing.drawing.drawing import Drawing

__all__ = [
    "Arrowhead",
    "Drawing",
    "LineEnding",
    "LineEndingType",
    "Resolution",
    "fit_ratio",
    "render_svg",
    "resolve_layout",
]
