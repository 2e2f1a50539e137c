"""
Global constants for relative_drawing.

Values here are read at call time, so project_config.apply_config_to_globals()
can override them for a whole run.
"""

# ---------------------------------------------------------------------------
# Numeric layer
# ---------------------------------------------------------------------------

# Significant digits kept by layout divisions (truncated, never rounded)
DIVISION_PRECISION = 64

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

# Explicit units per implicit unit in natural-size rendering
NATURAL_UNIT = 1

# Implicit width per character of a Text payload
TEXT_CHAR_WIDTH = 0.25

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Decimal places of coordinates in rendered SVG
OUTPUT_DECIMAL_PLACES = 6

# Decimal places of marker geometry (view boxes, paths)
MARKER_DECIMAL_PLACES = 13

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

LINE_STROKE = "black"
LINE_ENDING_FILL = "black"
LINE_ENDING_OPEN_FILL = "white"
LINE_ENDING_STROKE = "black"
ARROWHEAD_FILL = "red"
