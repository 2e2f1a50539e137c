"""
Unit tests for relative_drawing.drawing.svg_renderer.

Tests:
- Element serialization in both dialects
- Attribute ordering and escaping
- Marker elements built from MarkerGeometry
"""

from relative_drawing.drawing.markers import MarkerGeometry, MarkerPrimitive
from relative_drawing.drawing.svg_renderer import (
    DIMENSIONED_DIALECT,
    NATURAL_DIALECT,
    element_factory,
    marker_element,
    write_element,
)


class TestWriteElement:
    """Tests for write_element()."""

    def test_self_closing(self):
        """Test childless elements close with ' />'."""
        factory = element_factory()
        circle = factory.circle(center=("1", "2"), r="3")
        assert write_element(circle, DIMENSIONED_DIALECT) == '<circle r="3" cx="1" cy="2" />'

    def test_natural_quotes(self):
        """Test the natural dialect uses single quotes."""
        factory = element_factory()
        rect = factory.rect(insert=("0", "0"), size=("4", "2"))
        assert write_element(rect, NATURAL_DIALECT) == "<rect width='4' height='2' x='0' y='0' />"

    def test_unknown_attributes_keep_insertion_order(self):
        """Test attributes outside the fixed order follow it as inserted."""
        factory = element_factory()
        line = factory.line(start=("0", "1"), end=("2", "3"),
                            stroke="black", **{"stroke-width": "5"})
        assert write_element(line, DIMENSIONED_DIALECT) == (
            '<line x1="0" y1="1" x2="2" y2="3" stroke="black" stroke-width="5" />'
        )

    def test_attribute_quotes_escaped(self):
        """Test the active quote character is escaped inside values."""
        factory = element_factory()
        element = factory.circle(center=("0", "0"), r="1", fill="a'b\"c")
        assert "fill='a&apos;b\"c'" in write_element(element, NATURAL_DIALECT)
        assert 'fill="a\'b&quot;c"' in write_element(element, DIMENSIONED_DIALECT)

    def test_text_content(self):
        """Test text content is written between tags and escaped."""
        factory = element_factory()
        text = factory.text("1 < 2", x=["5"], y=["6"])
        assert write_element(text, DIMENSIONED_DIALECT) == '<text x="5" y="6">1 &lt; 2</text>'

    def test_children_separated(self):
        """Test children are separated by the dialect's separator."""
        factory = element_factory()
        group = factory.g()
        group.add(factory.circle(center=("0", "0"), r="1"))
        group.add(factory.circle(center=("1", "1"), r="1"))
        assert write_element(group, NATURAL_DIALECT) == (
            "<g>\n<circle r='1' cx='0' cy='0' />\n<circle r='1' cx='1' cy='1' />\n</g>"
        )
        assert write_element(group, DIMENSIONED_DIALECT) == (
            '<g><circle r="1" cx="0" cy="0" /><circle r="1" cx="1" cy="1" /></g>'
        )


class TestMarkerElement:
    """Tests for marker_element()."""

    def test_path_marker(self):
        """Test marker attributes and figure styling."""
        geometry = MarkerGeometry(
            type_name="BOX",
            marker_id="BOX-7",
            view_box=("6", "6"),
            ref=("3", "3"),
            primitive=MarkerPrimitive("path", (("d", "M1,1 L1,5 L5,5 L5,1 z"),)),
            fill="black",
            stroke="black",
        )
        marker = marker_element(element_factory(), geometry)
        assert write_element(marker, DIMENSIONED_DIALECT) == (
            '<marker id="BOX-7" orient="auto" viewBox="0 0 6 6" markerWidth="6" '
            'markerHeight="6" refX="3" refY="3">'
            '<path d="M1,1 L1,5 L5,5 L5,1 z" stroke="black" fill="black" />'
            '</marker>'
        )

    def test_ellipse_marker_with_opacity(self):
        """Test ellipse figures and fill-opacity."""
        geometry = MarkerGeometry(
            type_name="ELLIPSE",
            marker_id="ELLIPSE-1",
            view_box=("8", "6"),
            ref=("4", "3"),
            primitive=MarkerPrimitive(
                "ellipse", (("cx", "4"), ("cy", "3"), ("rx", "3"), ("ry", "2")),
            ),
            fill="white",
            fill_opacity="0",
        )
        marker = marker_element(element_factory(), geometry)
        assert '<ellipse cx="4" cy="3" rx="3" ry="2" fill="white" fill-opacity="0" />' in \
            write_element(marker, DIMENSIONED_DIALECT)
