"""Shape types: the base Shape and its Circle, Rectangle, Line and Text variants."""

from relative_drawing.shapes.circle import Circle
from relative_drawing.shapes.line import Line, LineEnd, Orientation
from relative_drawing.shapes.rectangle import Rectangle
from relative_drawing.shapes.shape import Port, Shape
from relative_drawing.shapes.text import Text

__all__ = [
    "Circle",
    "Line",
    "LineEnd",
    "Orientation",
    "Port",
    "Rectangle",
    "Shape",
    "Text",
]
