"""Exact numeric layer: ExactDecimal values and unit-tagged Measures."""

from relative_drawing.numeric.exact_decimal import (
    ExactDecimal,
    QuotientRemainder,
    ZERO,
    HALF,
    ONE,
    TWO,
)
from relative_drawing.numeric.measure import Measure, Unit

__all__ = [
    "ExactDecimal",
    "QuotientRemainder",
    "Measure",
    "Unit",
    "ZERO",
    "HALF",
    "ONE",
    "TWO",
]
