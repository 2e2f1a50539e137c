"""
Decoration types and their canonical forms.

Several public names share one geometry (DEFAULT, NORMAL and TRIANGLE are the
same triangle). canonicalize() maps a public name onto its Canonical entry:
the name used in marker ids, the geometry kind, and whether the figure is
hollow (white fill).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from relative_drawing.errors import UnsupportedOperationError


class LineEndingType(Enum):
    """Public decoration names, aliases included."""
    BAR = "BAR"
    BOX = "BOX"
    BRACKET = "BRACKET"
    CIRCLE = "CIRCLE"
    CROW = "CROW"
    DEFAULT = "DEFAULT"
    DIAMOND = "DIAMOND"
    DISK = "DISK"
    DOT = "DOT"
    ELLIPSE = "ELLIPSE"
    INVERTED = "INVERTED"
    KITE = "KITE"
    NORMAL = "NORMAL"
    OPEN_DIAMOND = "OPEN_DIAMOND"
    OPEN_DOT = "OPEN_DOT"
    RECTANGLE = "RECTANGLE"
    REVERSE = "REVERSE"
    RHOMBUS = "RHOMBUS"
    SQUARE = "SQUARE"
    STEALTH = "STEALTH"
    TEE = "TEE"
    TRIANGLE = "TRIANGLE"
    TURNED_SQUARE = "TURNED_SQUARE"


class GeometryKind(Enum):
    """Distinct marker figures."""
    TRIANGLE = "triangle"
    REVERSE_TRIANGLE = "reverse_triangle"
    SQUARE = "square"
    TURNED_SQUARE = "turned_square"
    RHOMBUS = "rhombus"
    DISK = "disk"
    BAR = "bar"
    RECTANGLE = "rectangle"
    STEALTH = "stealth"
    KITE = "kite"
    BRACKET = "bracket"
    ELLIPSE = "ellipse"


@dataclass(frozen=True)
class Canonical:
    """Canonical form of a decoration type.

    Attributes:
        name: Name used in marker ids
        kind: Figure drawn
        hollow: White fill instead of the solid fill color
        transparent: Fill is invisible (open paths)
    """
    name: str
    kind: GeometryKind
    hollow: bool = False
    transparent: bool = False


_TRIANGLE = Canonical("TRIANGLE", GeometryKind.TRIANGLE)
_REVERSE = Canonical("REVERSE", GeometryKind.REVERSE_TRIANGLE)
_BOX = Canonical("BOX", GeometryKind.SQUARE)
_DIAMOND = Canonical("DIAMOND", GeometryKind.TURNED_SQUARE)
_DOT = Canonical("DOT", GeometryKind.DISK)
_BAR = Canonical("BAR", GeometryKind.BAR)
_STEALTH = Canonical("STEALTH", GeometryKind.STEALTH)
_CIRCLE = Canonical("CIRCLE", GeometryKind.DISK, hollow=True)

CANONICAL: Dict[LineEndingType, Canonical] = {
    LineEndingType.TRIANGLE: _TRIANGLE,
    LineEndingType.DEFAULT: _TRIANGLE,
    LineEndingType.NORMAL: _TRIANGLE,
    LineEndingType.REVERSE: _REVERSE,
    LineEndingType.INVERTED: _REVERSE,
    LineEndingType.BOX: _BOX,
    LineEndingType.SQUARE: _BOX,
    LineEndingType.DIAMOND: _DIAMOND,
    LineEndingType.TURNED_SQUARE: _DIAMOND,
    LineEndingType.OPEN_DIAMOND: Canonical(
        "OPEN_DIAMOND", GeometryKind.TURNED_SQUARE, hollow=True,
    ),
    LineEndingType.RHOMBUS: Canonical("RHOMBUS", GeometryKind.RHOMBUS),
    LineEndingType.DOT: _DOT,
    LineEndingType.DISK: _DOT,
    LineEndingType.CIRCLE: _CIRCLE,
    LineEndingType.OPEN_DOT: _CIRCLE,
    LineEndingType.BAR: _BAR,
    LineEndingType.TEE: _BAR,
    LineEndingType.RECTANGLE: Canonical("RECTANGLE", GeometryKind.RECTANGLE),
    LineEndingType.STEALTH: _STEALTH,
    LineEndingType.CROW: _STEALTH,
    LineEndingType.KITE: Canonical("KITE", GeometryKind.KITE),
    LineEndingType.BRACKET: Canonical(
        "BRACKET", GeometryKind.BRACKET, hollow=True, transparent=True,
    ),
    LineEndingType.ELLIPSE: Canonical("ELLIPSE", GeometryKind.ELLIPSE),
}


def parse_type(value: Union[LineEndingType, str]) -> LineEndingType:
    """Accept an enum member or its (case-insensitive) name.

    Raises:
        UnsupportedOperationError: For unknown names
    """
    if isinstance(value, LineEndingType):
        return value
    try:
        return LineEndingType(str(value).upper())
    except ValueError:
        raise UnsupportedOperationError(f"unsupported decoration type: {value}") from None


def canonicalize(value: Union[LineEndingType, str]) -> Canonical:
    """Canonical form of a public decoration type."""
    return CANONICAL[parse_type(value)]
