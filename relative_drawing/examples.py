"""
Bundled example diagrams, rendered by main.py.

Each builder returns a fresh Drawing. Examples containing text need explicit
dimensions, so every example carries a default canvas size; main.py lets the
command line override it.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from relative_drawing.drawing.drawing import Drawing
from relative_drawing.drawing.markers.line_ending import Arrowhead, LineEnding
from relative_drawing.drawing.markers.types import LineEndingType
from relative_drawing.shapes.circle import Circle
from relative_drawing.shapes.line import Line, Orientation
from relative_drawing.shapes.rectangle import Rectangle
from relative_drawing.shapes.text import Text, estimated_width


@dataclass(frozen=True)
class Example:
    """A named example diagram.

    Attributes:
        name: Name used on the command line
        description: One-line description for --list
        build: Builder returning a new Drawing
        width: Default explicit width (None: not set)
        height: Default explicit height (None: not set)
    """
    name: str
    description: str
    build: Callable[[], Drawing]
    width: Optional[float] = 100
    height: Optional[float] = 100


def three_circles_horizontal() -> Drawing:
    drawing = Drawing()
    circles = [Circle() for _ in range(3)]
    for circle in circles:
        drawing.add(circle)
    circles[1].set_right_of(circles[0])
    circles[2].set_right_of(circles[1])
    return drawing


def three_circles_vertical() -> Drawing:
    drawing = Drawing()
    circles = [Circle() for _ in range(3)]
    for circle in circles:
        drawing.add(circle)
    circles[1].set_below(circles[0])
    circles[2].set_below(circles[1])
    return drawing


def rectangle() -> Drawing:
    drawing = Drawing()
    drawing.add(Rectangle())
    return drawing


def shaded_rectangles(count: int = 1000) -> Drawing:
    """A row of thin rectangles shading from black through red to white."""
    drawing = Drawing()
    previous = None
    for i in range(count):
        current = Rectangle(0.01)
        current.fill = f"hsl(0, 100%, {i * 100 // count}%)"
        drawing.add(current)
        if previous is not None:
            current.set_right_of(previous)
        previous = current
    return drawing


def nonadjacency() -> Drawing:
    """Two circles one diameter apart."""
    drawing = Drawing()
    first, second = Circle(), Circle()
    drawing.add(first)
    drawing.add(second)
    second.set_right_of(first, second.implicit_width)
    return drawing


def line_between_ports() -> Drawing:
    """Two circles connected port to port by a red line."""
    drawing = Drawing()
    first, second = Circle(), Circle()
    drawing.add(first)
    drawing.add(second)
    first.fill = "green"
    second.fill = "blue"
    second.set_right_of(first, second.implicit_width)
    line = Line(first.port("right"), second.port("left"))
    line.stroke = "red"
    drawing.add(line)
    return drawing


def _decoration_rows(
    rows: Sequence[Tuple[str, Callable[[], LineEnding]]],
    thickness: float,
) -> Drawing:
    """Labelled horizontal lines stacked in a column, one decoration each."""
    drawing = Drawing()
    line_width = max(estimated_width(label) for label, _ in rows)
    previous: Optional[Line] = None
    for label, make_ending in rows:
        text = Text(label)
        if previous is not None:
            text.set_below(previous)
        line = Line(Orientation.HORIZONTAL)
        line.implicit_width = line_width
        line.set_thickness(thickness)
        line.add_line_ending(make_ending())
        line.set_below(text)
        drawing.add(text)
        drawing.add(line)
        previous = line
    return drawing


LINE_ENDING_GROUPS: List[Tuple[str, LineEndingType]] = [
    ("DEFAULT, NORMAL, TRIANGLE", LineEndingType.TRIANGLE),
    ("REVERSE, INVERTED", LineEndingType.REVERSE),
    ("BOX, SQUARE", LineEndingType.BOX),
    ("DIAMOND, TURNED_SQUARE", LineEndingType.DIAMOND),
    ("OPEN_DIAMOND", LineEndingType.OPEN_DIAMOND),
    ("RHOMBUS", LineEndingType.RHOMBUS),
    ("DISK, DOT", LineEndingType.DOT),
    ("CIRCLE, OPEN_DOT", LineEndingType.CIRCLE),
    ("BAR, TEE", LineEndingType.BAR),
    ("RECTANGLE", LineEndingType.RECTANGLE),
    ("STEALTH, CROW", LineEndingType.STEALTH),
    ("KITE", LineEndingType.KITE),
    ("BRACKET", LineEndingType.BRACKET),
    ("ELLIPSE", LineEndingType.ELLIPSE),
]

ARROWHEAD_GROUPS: List[Tuple[str, LineEndingType]] = [
    ("DEFAULT, NORMAL, TRIANGLE", LineEndingType.DEFAULT),
    ("BOX, SQUARE", LineEndingType.BOX),
    ("DIAMOND, TURNED_SQUARE", LineEndingType.DIAMOND),
    ("DISK, DOT", LineEndingType.DOT),
]


def line_ending_gallery() -> Drawing:
    rows = [
        (label, lambda type_=type_: LineEnding(type_))
        for label, type_ in LINE_ENDING_GROUPS
    ]
    return _decoration_rows(rows, thickness=5)


def arrowhead_gallery() -> Drawing:
    rows = [
        (label, lambda type_=type_: Arrowhead(type_))
        for label, type_ in ARROWHEAD_GROUPS
    ]
    return _decoration_rows(rows, thickness=5)


def line_ending_sizes() -> Drawing:
    """The default triangle at several scale factors."""
    rows = [
        ("Default size", lambda: LineEnding()),
        ("Size 2", lambda: LineEnding(width=2, height=2)),
        ("Size 0.5", lambda: LineEnding(width=0.5, height=0.5)),
        ("Width = 2, Height = 0.5", lambda: LineEnding(width=2, height=0.5)),
    ]
    return _decoration_rows(rows, thickness=1)


EXAMPLES: Dict[str, Example] = {
    example.name: example
    for example in (
        Example("three-circles-horizontal", "Three circles in a row", three_circles_horizontal),
        Example("three-circles-vertical", "Three circles in a column", three_circles_vertical),
        Example("rectangle", "A single square rectangle", rectangle),
        Example("shaded-rectangles", "1000 thin rectangles shading in lightness",
                shaded_rectangles, width=1000, height=100),
        Example("nonadjacency", "Two circles one diameter apart", nonadjacency),
        Example("line", "A line between the ports of two circles", line_between_ports),
        Example("line-endings", "Every line ending type", line_ending_gallery,
                width=300, height=None),
        Example("arrowheads", "The legacy arrowhead types", arrowhead_gallery,
                width=300, height=None),
        Example("line-ending-sizes", "Line ending scale factors", line_ending_sizes,
                width=300, height=None),
    )
}


def get_example(name: str) -> Example:
    """Look up an example by name.

    Raises:
        KeyError: With the list of valid names
    """
    try:
        return EXAMPLES[name]
    except KeyError:
        raise KeyError(
            f"Unknown example {name!r}; available: {', '.join(sorted(EXAMPLES))}"
        ) from None
