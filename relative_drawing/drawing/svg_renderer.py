"""
SVG serialization of a resolved drawing.

Shapes build their elements with an svgwrite.Drawing used as an element
factory (dwg.circle, dwg.rect, dwg.line, dwg.text, dwg.marker, dwg.path).
The elements are then written by write_element() instead of svgwrite's own
get_xml(), because the output format fixes the attribute order and the quote
character:

Natural-size mode (no explicit dimensions)::

    <?xml version='1.0' standalone='no'?><svg xmlns='http://www.w3.org/2000/svg'>
    <defs>
    <marker id='TRIANGLE-0' orient='auto' viewBox='0 0 W H' ...>
    <path d='...' stroke='black' fill='black' />
    </marker>
    </defs>

    <line x1='..' y1='..' x2='..' y2='..' stroke='black' marker-end='url(#TRIANGLE-0)' />
    </svg>

Dimensioned mode::

    <?xml version="1.0" standalone="no"?><svg xmlns="http://www.w3.org/2000/svg"
    width="100" height="100"><circle r="50" cx="50" cy="50" /></svg>

(one line; no separators between elements).
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Tuple
from xml.sax.saxutils import escape

import svgwrite
import svgwrite.path

from relative_drawing import config
from relative_drawing.drawing.markers.geometry import MarkerGeometry

if TYPE_CHECKING:
    from relative_drawing.drawing.fitting import Resolution
    from relative_drawing.shapes.shape import Shape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SvgDialect:
    """Quote character and element separator of one output mode."""
    quote: str
    separator: str


NATURAL_DIALECT = SvgDialect(quote="'", separator="\n")
DIMENSIONED_DIALECT = SvgDialect(quote='"', separator="")

# Leading attributes per element; remaining attributes keep insertion order.
ATTRIBUTE_ORDER: Dict[str, Tuple[str, ...]] = {
    'circle': ('r', 'cx', 'cy'),
    'ellipse': ('cx', 'cy', 'rx', 'ry'),
    'rect': ('width', 'height', 'x', 'y'),
    'line': ('x1', 'y1', 'x2', 'y2'),
    'text': ('x', 'y'),
    'marker': ('id', 'orient', 'viewBox', 'markerWidth', 'markerHeight', 'refX', 'refY'),
    'path': ('d',),
}


def element_factory() -> svgwrite.Drawing:
    """svgwrite document used only to create elements (validation off)."""
    return svgwrite.Drawing(debug=False)


def _attribute_value(value: Any) -> str:
    # text x/y may be stored as coordinate lists
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


def _ordered_attributes(element: Any) -> List[Tuple[str, str]]:
    attributes = dict(element.attribs)
    if isinstance(element, svgwrite.path.Path) and element.commands:
        attributes['d'] = " ".join(str(command) for command in element.commands)
    leading = ATTRIBUTE_ORDER.get(element.elementname, ())
    names = [name for name in leading if name in attributes]
    names.extend(name for name in attributes if name not in leading)
    return [
        (name, _attribute_value(attributes[name]))
        for name in names
        if attributes[name] is not None and _attribute_value(attributes[name]) != ""
    ]


def write_element(element: Any, dialect: SvgDialect) -> str:
    """Serialize an svgwrite element and its children.

    Args:
        element: svgwrite element
        dialect: Quote character and child separator

    Returns:
        Markup; childless elements without text are self-closing (" />")
    """
    quote = dialect.quote
    entities = {quote: "&quot;" if quote == '"' else "&apos;"}
    parts = [f"<{element.elementname}"]
    for name, value in _ordered_attributes(element):
        parts.append(f" {name}={quote}{escape(value, entities)}{quote}")
    head = "".join(parts)

    text = getattr(element, 'text', None)
    children = list(element.elements)
    if not children and text is None:
        return head + " />"
    if children:
        separator = dialect.separator
        inner = "".join(write_element(child, dialect) + separator for child in children)
        return f"{head}>{separator}{inner}</{element.elementname}>"
    return f"{head}>{escape(str(text))}</{element.elementname}>"


def marker_element(factory: svgwrite.Drawing, geometry: MarkerGeometry) -> Any:
    """<marker> element with its figure for one decoration."""
    width, height = geometry.view_box
    marker = factory.marker(
        id=geometry.marker_id,
        orient='auto',
        viewBox=f"0 0 {width} {height}",
        markerWidth=width,
        markerHeight=height,
        refX=geometry.ref[0],
        refY=geometry.ref[1],
    )
    style: Dict[str, str] = {}
    if geometry.stroke is not None:
        style['stroke'] = geometry.stroke
    if geometry.fill is not None:
        style['fill'] = geometry.fill
    if geometry.fill_opacity is not None:
        style['fill-opacity'] = geometry.fill_opacity

    shape = dict(geometry.primitive.attributes)
    tag = geometry.primitive.tag
    if tag == 'path':
        figure = factory.path(d=shape['d'], **style)
    elif tag == 'circle':
        figure = factory.circle(center=(shape['cx'], shape['cy']), r=shape['r'], **style)
    else:
        figure = factory.ellipse(
            center=(shape['cx'], shape['cy']), r=(shape['rx'], shape['ry']), **style,
        )
    marker.add(figure)
    return marker


def _header(resolution: 'Resolution', dialect: SvgDialect) -> str:
    q = dialect.quote
    root = f"<svg xmlns={q}{config.SVG_NAMESPACE}{q}"
    if not resolution.natural:
        fmt = resolution.format
        root += f" width={q}{fmt(resolution.width)}{q} height={q}{fmt(resolution.height)}{q}"
    return f"<?xml version={q}1.0{q} standalone={q}no{q}?>{root}>"


def render_svg(shapes: Iterable['Shape'], resolution: 'Resolution') -> str:
    """Serialize resolved shapes into an SVG document.

    Args:
        shapes: Top-level shapes in insertion order
        resolution: Layout to render

    Returns:
        SVG text in the dialect selected by `resolution.natural`
    """
    dialect = NATURAL_DIALECT if resolution.natural else DIMENSIONED_DIALECT
    separator = dialect.separator
    factory = element_factory()

    elements = []
    markers: List[MarkerGeometry] = []
    for shape in shapes:
        elements.extend(shape.svg_elements(factory, resolution))
        markers.extend(shape.marker_geometries())

    out = [_header(resolution, dialect), separator]
    if markers:
        out.append("<defs>" + separator)
        for geometry in markers:
            out.append(write_element(marker_element(factory, geometry), dialect) + separator)
        out.append("</defs>" + separator + separator)
    for element in elements:
        out.append(write_element(element, dialect) + separator)
    out.append("</svg>")

    logger.debug("Serialized %d elements, %d markers", len(elements), len(markers))
    return "".join(out)
