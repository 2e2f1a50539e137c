"""
Arbitrary-precision decimal values for layout arithmetic.

ExactDecimal wraps decimal.Decimal so that chained constraint offsets never
accumulate binary floating-point error:

- add / sub / mul are exact (unbounded context)
- div / pow take an explicit precision in significant digits and truncate
  toward zero
- equality, ordering and hashing are value based (1.00 == 1 == 1E0)

Usage:
    from relative_drawing.numeric import ExactDecimal

    third = ExactDecimal(1).div(ExactDecimal(3), 10)   # 0.3333333333
    q, r = ExactDecimal(2).div_with_remainder(ExactDecimal(3), 10)
    assert q * ExactDecimal(3) + r == ExactDecimal(2)
"""

import decimal
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_EVEN
from typing import NamedTuple, Union

# Context for operations whose exact result is always finite
_EXACT = decimal.Context(
    prec=decimal.MAX_PREC,
    rounding=ROUND_DOWN,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

Number = Union[int, float, str, Decimal, 'ExactDecimal']


def _truncating_context(precision: int) -> decimal.Context:
    if precision < 1:
        raise ValueError(f"Precision must be a positive number of digits, got {precision}")
    return decimal.Context(
        prec=precision,
        rounding=ROUND_DOWN,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
    )


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, ExactDecimal):
        return value._value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"ExactDecimal requires a finite value, got {value}")
        return value
    if isinstance(value, bool):
        raise TypeError("ExactDecimal does not accept booleans")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # repr() is the shortest string that round-trips the float
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except decimal.InvalidOperation:
            raise ValueError(f"Not a decimal number: {value!r}") from None
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to ExactDecimal")
    if not result.is_finite():
        raise ValueError(f"ExactDecimal requires a finite value, got {value!r}")
    return result


class QuotientRemainder(NamedTuple):
    """Result of ExactDecimal.div_with_remainder()."""
    quotient: 'ExactDecimal'
    remainder: 'ExactDecimal'


class ExactDecimal:
    """Immutable unbounded-precision signed decimal."""

    __slots__ = ('_value',)

    def __init__(self, value: Number = 0):
        self._value = _to_decimal(value)

    @classmethod
    def create(cls, value: Number) -> 'ExactDecimal':
        """Create a value from an int, float, string, Decimal or ExactDecimal.

        Floats go through their shortest repr, so create(0.1) is exactly 0.1.
        """
        if isinstance(value, ExactDecimal):
            return value
        return cls(value)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: Number) -> 'ExactDecimal':
        return ExactDecimal(_EXACT.add(self._value, _to_decimal(other)))

    def sub(self, other: Number) -> 'ExactDecimal':
        return ExactDecimal(_EXACT.subtract(self._value, _to_decimal(other)))

    def mul(self, other: Number) -> 'ExactDecimal':
        return ExactDecimal(_EXACT.multiply(self._value, _to_decimal(other)))

    def div(self, other: Number, precision: int) -> 'ExactDecimal':
        """Divide, truncating the quotient to `precision` significant digits.

        Args:
            other: Divisor
            precision: Number of significant digits kept

        Returns:
            Truncated quotient

        Raises:
            ZeroDivisionError: If the divisor is zero
        """
        divisor = _to_decimal(other)
        if divisor.is_zero():
            raise ZeroDivisionError(f"Division of {self} by zero")
        return ExactDecimal(_truncating_context(precision).divide(self._value, divisor))

    def div_with_remainder(self, other: Number, precision: int) -> QuotientRemainder:
        """Divide and return the truncated quotient with the exact remainder.

        quotient * other + remainder == self holds exactly.

        Raises:
            ZeroDivisionError: If the divisor is zero
        """
        quotient = self.div(other, precision)
        remainder = self.sub(quotient.mul(other))
        return QuotientRemainder(quotient, remainder)

    def pow(self, exponent: int, precision: int) -> 'ExactDecimal':
        """Raise to an integer power, truncated to `precision` significant digits.

        Raises:
            ZeroDivisionError: For a negative power of zero
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Exponent must be an int, got {type(exponent).__name__}")
        if exponent < 0:
            return ExactDecimal(1).div(self.pow(-exponent, precision + 2), precision)
        exact = Decimal(1)
        base = self._value
        while exponent:
            if exponent & 1:
                exact = _EXACT.multiply(exact, base)
            exponent >>= 1
            if exponent:
                base = _EXACT.multiply(base, base)
        return ExactDecimal(_truncating_context(precision).plus(exact))

    def trunc_decimals(self) -> 'ExactDecimal':
        """Drop the fractional part without rounding."""
        return ExactDecimal(_EXACT.to_integral_value(self._value))

    def abs(self) -> 'ExactDecimal':
        return ExactDecimal(self._value.copy_abs())

    def negate(self) -> 'ExactDecimal':
        return ExactDecimal(self._value.copy_negate())

    def min(self, other: Number) -> 'ExactDecimal':
        other = ExactDecimal.create(other)
        return other if other < self else self

    def max(self, other: Number) -> 'ExactDecimal':
        other = ExactDecimal.create(other)
        return other if other > self else self

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self._value.is_zero()

    def is_integer(self) -> bool:
        return self._value == self._value.to_integral_value()

    def signum(self) -> int:
        if self._value.is_zero():
            return 0
        return -1 if self._value.is_signed() else 1

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_decimal(self) -> Decimal:
        return self._value

    def to_plain_string(self) -> str:
        """Plain notation without exponent or trailing zeros."""
        if self._value.is_zero():
            return "0"
        return format(_EXACT.normalize(self._value), 'f')

    def to_fixed_decimal_string(self, places: int) -> str:
        """Fixed number of decimals, truncating extra digits."""
        quantum = Decimal(1).scaleb(-places)
        fixed = self._value.quantize(quantum, rounding=ROUND_DOWN, context=_EXACT)
        if fixed.is_zero():
            fixed = fixed.copy_abs()
        return format(fixed, 'f')

    def to_svg(self, places: int) -> str:
        """Display form for markup: integers bare, decimals rounded to `places`."""
        if self.is_integer():
            return self.trunc_decimals().to_plain_string()
        quantum = Decimal(1).scaleb(-places)
        rounded = self._value.quantize(quantum, rounding=ROUND_HALF_EVEN, context=_EXACT)
        return ExactDecimal(rounded).to_plain_string()

    def __float__(self) -> float:
        return float(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __str__(self) -> str:
        return self.to_plain_string()

    def __repr__(self) -> str:
        return f"ExactDecimal('{self.to_plain_string()}')"

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: Number) -> 'ExactDecimal':
        try:
            return self.add(other)
        except TypeError:
            return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Number) -> 'ExactDecimal':
        try:
            return self.sub(other)
        except TypeError:
            return NotImplemented

    def __rsub__(self, other: Number) -> 'ExactDecimal':
        try:
            return ExactDecimal(other).sub(self)
        except TypeError:
            return NotImplemented

    def __mul__(self, other: Number) -> 'ExactDecimal':
        try:
            return self.mul(other)
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> 'ExactDecimal':
        return self.negate()

    def __abs__(self) -> 'ExactDecimal':
        return self.abs()

    def _compare(self, other: object) -> int:
        other_value = _to_decimal(other)  # type: ignore[arg-type]
        if self._value < other_value:
            return -1
        if self._value > other_value:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        # equal values hash equal; str and float are never equal
        if not isinstance(other, (ExactDecimal, Decimal, int)) or isinstance(other, bool):
            return NotImplemented
        try:
            return self._compare(other) == 0
        except ValueError:
            return NotImplemented

    def __lt__(self, other: Number) -> bool:
        try:
            return self._compare(other) < 0
        except TypeError:
            return NotImplemented

    def __le__(self, other: Number) -> bool:
        try:
            return self._compare(other) <= 0
        except TypeError:
            return NotImplemented

    def __gt__(self, other: Number) -> bool:
        try:
            return self._compare(other) > 0
        except TypeError:
            return NotImplemented

    def __ge__(self, other: Number) -> bool:
        try:
            return self._compare(other) >= 0
        except TypeError:
            return NotImplemented

    def __hash__(self) -> int:
        # Decimal hashing is value based: hash(Decimal('1.00')) == hash(1)
        return hash(self._value)


ZERO = ExactDecimal(0)
HALF = ExactDecimal("0.5")
ONE = ExactDecimal(1)
TWO = ExactDecimal(2)
