"""
Unit tests for relative_drawing.drawing.markers.

Tests:
- Type parsing and alias canonicalization
- Figure areas and shapes (numpy geometry)
- LineEnding and Arrowhead ids, padding and colors
- Marker definitions in rendered SVG
"""

import math
import re

import numpy as np
import pytest

from relative_drawing import config as cfg
from relative_drawing.drawing.drawing import Drawing
from relative_drawing.drawing.markers import (
    Arrowhead,
    GeometryKind,
    LineEnding,
    LineEndingType,
    canonicalize,
)
from relative_drawing.drawing.markers.geometry import (
    DISK_RADIUS,
    FIGURES,
    SQUARE_SIDE,
    format_number,
    rotation_matrix,
)
from relative_drawing.errors import UnsupportedOperationError
from relative_drawing.shapes import Line, LineEnd

from tests.conftest import NATURAL_MARKER_PATTERN, strip_marker_ids


def path_points(d: str) -> np.ndarray:
    """Vertices of an 'Mx,y Lx,y ... z' path as an (n, 2) array."""
    pairs = re.findall(r"[ML](-?[\d.]+),(-?[\d.]+)", d)
    return np.array([[float(x), float(y)] for x, y in pairs])


def polygon_area(points: np.ndarray) -> float:
    x, y = points[:, 0], points[:, 1]
    return 0.5 * abs(np.dot(x, np.roll(y, 1)) - np.dot(y, np.roll(x, 1)))


def natural_line_svg(ending: LineEnding, end: LineEnd = LineEnd.END) -> str:
    drawing = Drawing()
    line = Line()
    line.add_line_ending(ending, end)
    drawing.add(line)
    return drawing.render()


class TestTypes:
    """Tests for decoration types."""

    @pytest.mark.parametrize("alias,canonical", [
        ("DEFAULT", "TRIANGLE"),
        ("NORMAL", "TRIANGLE"),
        ("INVERTED", "REVERSE"),
        ("SQUARE", "BOX"),
        ("TURNED_SQUARE", "DIAMOND"),
        ("DISK", "DOT"),
        ("OPEN_DOT", "CIRCLE"),
        ("TEE", "BAR"),
        ("CROW", "STEALTH"),
    ])
    def test_aliases(self, alias, canonical):
        """Test aliases map onto one canonical name."""
        assert canonicalize(alias).name == canonical

    def test_case_insensitive(self):
        """Test type names are accepted in any case."""
        assert canonicalize("box") is canonicalize(LineEndingType.BOX)

    def test_unknown_type(self):
        """Test unknown names are unsupported."""
        with pytest.raises(UnsupportedOperationError, match="unsupported decoration type: ARROW"):
            LineEnding("ARROW")

    def test_rhombus_is_not_diamond(self):
        """Test RHOMBUS has its own figure."""
        assert canonicalize("RHOMBUS").kind is GeometryKind.RHOMBUS
        assert canonicalize("DIAMOND").kind is GeometryKind.TURNED_SQUARE

    def test_hollow_types(self):
        """Test the open figures are hollow."""
        assert canonicalize("CIRCLE").hollow
        assert canonicalize("OPEN_DIAMOND").hollow
        assert not canonicalize("DOT").hollow

    def test_every_type_has_a_figure(self):
        """Test every public type resolves to a figure function."""
        for type_ in LineEndingType:
            assert canonicalize(type_).kind in FIGURES


class TestFigures:
    """Tests for the closed-form figures."""

    @pytest.mark.parametrize("kind", [
        GeometryKind.TRIANGLE,
        GeometryKind.REVERSE_TRIANGLE,
        GeometryKind.SQUARE,
        GeometryKind.TURNED_SQUARE,
        GeometryKind.RHOMBUS,
        GeometryKind.RECTANGLE,
    ])
    def test_closed_figures_have_area_16(self, kind):
        """Test the filled polygons have equal area at scale 1."""
        figure = FIGURES[kind](1.0, 1.0)
        assert math.isclose(polygon_area(figure.outline), 16.0, rel_tol=1e-9)

    def test_disk_area(self):
        """Test the disk has area 16."""
        figure = FIGURES[GeometryKind.DISK](1.0, 1.0)
        rx, ry = figure.radii
        assert math.isclose(math.pi * rx * ry, 16.0, rel_tol=1e-9)
        assert math.isclose(rx, DISK_RADIUS)

    def test_turned_square_is_rotated(self):
        """Test the diamond's vertices sit on the box edge midpoints."""
        figure = FIGURES[GeometryKind.TURNED_SQUARE](1.0, 1.0)
        diagonal = SQUARE_SIDE * math.sqrt(2.0)
        assert math.isclose(figure.width, diagonal)
        xs, ys = figure.outline[:, 0], figure.outline[:, 1]
        assert np.allclose(sorted(xs), [0.0, diagonal / 2, diagonal / 2, diagonal])
        assert np.allclose(sorted(ys), [0.0, diagonal / 2, diagonal / 2, diagonal])

    def test_scale_factors(self):
        """Test width and height scale independently."""
        figure = FIGURES[GeometryKind.SQUARE](2.0, 0.5)
        assert figure.width == 8.0
        assert figure.height == 2.0

    def test_rotation_matrix(self):
        """Test a quarter turn maps x onto y."""
        assert np.allclose(rotation_matrix(math.pi / 2) @ np.array([1.0, 0.0]), [0.0, 1.0])

    def test_format_number(self):
        """Test formatting of marker coordinates."""
        assert format_number(6.0, 13) == "6"
        assert format_number(0.1 + 0.2, 13) == "0.3"
        assert format_number(np.float64(2.5), 13) == "2.5"


class TestLineEnding:
    """Tests for LineEnding."""

    def test_ids_are_unique(self):
        """Test each instance has its own marker id."""
        first, second = LineEnding(), LineEnding()
        assert second.unique_id > first.unique_id
        assert first.marker_id == f"TRIANGLE-{first.unique_id}"
        assert first.marker_id != second.marker_id

    def test_box_view_box_is_padded(self):
        """Test a 4 x 4 square is padded to 6 x 6."""
        geometry = LineEnding("BOX").geometry()
        assert geometry.view_box == ("6", "6")
        assert geometry.ref == ("3", "3")
        assert geometry.marker_width == "6"

    def test_size_scales_view_box(self):
        """Test set_size() scales the figure before padding."""
        ending = LineEnding("BOX")
        ending.set_size(2)
        assert ending.geometry().view_box == ("10", "10")

    def test_solid_colors(self):
        """Test solid figures default to black fill and stroke."""
        geometry = LineEnding("DOT").geometry()
        assert geometry.fill == "black"
        assert geometry.stroke == "black"
        assert geometry.primitive.tag == "circle"

    def test_hollow_fill_is_white(self):
        """Test hollow figures are filled white."""
        ending = LineEnding(LineEndingType.OPEN_DOT)
        assert ending.is_hollow
        assert ending.geometry().fill == "white"

    def test_custom_colors(self):
        """Test fill and stroke overrides; '' omits the stroke."""
        ending = LineEnding()
        ending.fill = "blue"
        ending.stroke = ""
        geometry = ending.geometry()
        assert geometry.fill == "blue"
        assert geometry.stroke is None

    def test_configured_colors(self):
        """Test default colors come from the config module."""
        cfg.LINE_ENDING_FILL = "navy"
        assert LineEnding().geometry().fill == "navy"

    def test_bracket_is_open(self):
        """Test the bracket is an open path with a transparent fill."""
        geometry = LineEnding("BRACKET").geometry()
        assert not geometry.primitive.attributes[0][1].endswith("z")
        assert geometry.fill_opacity == "0"

    def test_ellipse_primitive(self):
        """Test the ellipse figure is an <ellipse> with distinct radii."""
        geometry = LineEnding("ELLIPSE").geometry()
        attributes = dict(geometry.primitive.attributes)
        assert geometry.primitive.tag == "ellipse"
        assert attributes == {"cx": "4", "cy": "3", "rx": "3", "ry": "2"}

    def test_reverse_and_inverted_match(self):
        """Test aliases render identical markers apart from ids."""
        reverse = natural_line_svg(LineEnding("REVERSE"))
        inverted = natural_line_svg(LineEnding("INVERTED"))
        assert strip_marker_ids(reverse) == strip_marker_ids(inverted)


class TestArrowhead:
    """Tests for the legacy Arrowhead."""

    @pytest.mark.parametrize("type_", ["REVERSE", "CIRCLE", "BAR", "ELLIPSE", "OPEN_DIAMOND"])
    def test_unsupported_types(self, type_):
        """Test only the four legacy groups are accepted."""
        with pytest.raises(UnsupportedOperationError, match="unsupported decoration type"):
            Arrowhead(type_)

    @pytest.mark.parametrize("type_", ["DEFAULT", "SQUARE", "TURNED_SQUARE", "DISK"])
    def test_supported_types(self, type_):
        """Test the legacy groups and their aliases are accepted."""
        assert Arrowhead(type_).geometry() is not None

    def test_bare_canonical_id(self):
        """Test arrowhead ids carry no instance number."""
        assert Arrowhead("SQUARE").marker_id == "BOX"
        assert Arrowhead().marker_id == "TRIANGLE"

    def test_unpadded_and_red(self):
        """Test arrowheads are unpadded, red and unstroked."""
        geometry = Arrowhead("BOX").geometry()
        assert geometry.view_box == ("4", "4")
        assert geometry.fill == "red"
        assert geometry.stroke is None


class TestMarkerOutput:
    """Marker definitions in rendered SVG."""

    def test_natural_marker_definition(self):
        """Test the <defs> block and marker reference in natural mode."""
        ending = LineEnding("BOX")
        svg = natural_line_svg(ending)
        match = NATURAL_MARKER_PATTERN.search(svg)
        assert match is not None
        assert match.group("id") == ending.marker_id
        assert match.group("vw") == "6"
        assert match.group("tag") == "path"
        assert "\n<defs>\n" in svg
        assert "</defs>\n\n" in svg
        assert f"marker-end='url(#{ending.marker_id})'" in svg

    def test_figure_style_order(self):
        """Test the figure lists geometry, then stroke, then fill."""
        svg = natural_line_svg(LineEnding("BOX"))
        assert "<path d='M1,1 L1,5 L5,5 L5,1 z' stroke='black' fill='black' />" in svg

    def test_marker_start(self):
        """Test a decoration at the start uses marker-start."""
        ending = LineEnding()
        svg = natural_line_svg(ending, LineEnd.START)
        assert f"marker-start='url(#{ending.marker_id})'" in svg
        assert "marker-end" not in svg

    def test_each_instance_defines_its_marker(self):
        """Test identical decorations each emit a definition."""
        drawing = Drawing()
        for _ in range(2):
            line = Line()
            line.add_line_ending(LineEnding())
            drawing.add(line)
        svg = drawing.render()
        assert len(NATURAL_MARKER_PATTERN.findall(svg)) == 2

    def test_dimensioned_markers_use_double_quotes(self):
        """Test markers follow the dimensioned dialect."""
        drawing = Drawing(100, 100)
        line = Line()
        line.add_arrowhead()
        drawing.add(line)
        svg = drawing.render()
        assert '<defs><marker id="TRIANGLE" orient="auto"' in svg
        assert '</defs><line ' in svg
        assert 'fill="red"' in svg
