from relative_drawing.geometry.box import PortSide, ShapeGeometry
from relative_drawing.geometry.point import Point

__all__ = ["Point", "PortSide", "ShapeGeometry"]
