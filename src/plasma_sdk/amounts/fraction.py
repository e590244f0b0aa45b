"""
Exact rational arithmetic.

Every operation returns a new Fraction; numerator and denominator are plain
Python ints so precision is unbounded. Rounding only happens at the
formatting boundary (to_significant / to_fixed) and in quotient.
"""
from math import gcd
from typing import Union

from ..constants import BigintIsh, Rounding
from ..errors import PreconditionError, require
from ..utils.amounts import parse_bigint_ish


def _round_div(numerator: int, denominator: int, rounding: Rounding) -> int:
    """Integer division of numerator by a positive denominator under rounding."""
    sign = -1 if numerator < 0 else 1
    quotient, remainder = divmod(abs(numerator), denominator)
    if remainder:
        if rounding == Rounding.ROUND_UP:
            quotient += 1
        elif rounding == Rounding.ROUND_HALF_UP and 2 * remainder >= denominator:
            quotient += 1
    return sign * quotient


def _format_scaled(value: int, places: int) -> str:
    """Render value * 10**-places with exactly `places` fractional digits."""
    digits = str(abs(value)).rjust(places + 1, "0")
    sign = "-" if value < 0 else ""
    if places == 0:
        return f"{sign}{digits}"
    return f"{sign}{digits[:-places]}.{digits[-places:]}"


def strip_trailing_zeros(text: str) -> str:
    """Drop trailing fractional zeros and a dangling decimal point."""
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


class Fraction:
    """An immutable numerator / denominator pair with a positive denominator."""

    def __init__(self, numerator: BigintIsh, denominator: BigintIsh = 1):
        numerator = parse_bigint_ish(numerator)
        denominator = parse_bigint_ish(denominator)
        if denominator == 0:
            raise PreconditionError("Fraction denominator must be non-zero")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        self.numerator = numerator
        self.denominator = denominator

    @staticmethod
    def _coerce(other: Union["Fraction", BigintIsh]) -> "Fraction":
        if isinstance(other, Fraction):
            return other
        return Fraction(parse_bigint_ish(other))

    @property
    def quotient(self) -> int:
        """Integer part, truncated toward zero."""
        quotient = abs(self.numerator) // self.denominator
        return -quotient if self.numerator < 0 else quotient

    @property
    def remainder(self) -> "Fraction":
        """What is left after removing the quotient, same sign as the numerator."""
        return Fraction(self.numerator - self.quotient * self.denominator, self.denominator)

    def invert(self) -> "Fraction":
        return Fraction(self.denominator, self.numerator)

    def negate(self) -> "Fraction":
        return Fraction(-self.numerator, self.denominator)

    def add(self, other: Union["Fraction", BigintIsh]) -> "Fraction":
        other = self._coerce(other)
        if self.denominator == other.denominator:
            return Fraction(self.numerator + other.numerator, self.denominator)
        return Fraction(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def subtract(self, other: Union["Fraction", BigintIsh]) -> "Fraction":
        other = self._coerce(other)
        if self.denominator == other.denominator:
            return Fraction(self.numerator - other.numerator, self.denominator)
        return Fraction(
            self.numerator * other.denominator - other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def multiply(self, other: Union["Fraction", BigintIsh]) -> "Fraction":
        other = self._coerce(other)
        return Fraction(self.numerator * other.numerator, self.denominator * other.denominator)

    def divide(self, other: Union["Fraction", BigintIsh]) -> "Fraction":
        other = self._coerce(other)
        return Fraction(self.numerator * other.denominator, self.denominator * other.numerator)

    def less_than(self, other: Union["Fraction", BigintIsh]) -> bool:
        other = self._coerce(other)
        return self.numerator * other.denominator < other.numerator * self.denominator

    def equal_to(self, other: Union["Fraction", BigintIsh]) -> bool:
        other = self._coerce(other)
        return self.numerator * other.denominator == other.numerator * self.denominator

    def greater_than(self, other: Union["Fraction", BigintIsh]) -> bool:
        other = self._coerce(other)
        return self.numerator * other.denominator > other.numerator * self.denominator

    def reduced(self) -> "Fraction":
        """Equal fraction in lowest terms."""
        divisor = gcd(self.numerator, self.denominator)
        return Fraction(self.numerator // divisor, self.denominator // divisor)

    def to_significant(self, significant_digits: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        """
        Format with at most `significant_digits` significant digits.

        Trailing zeros after the decimal point are dropped, and the result
        is never in scientific notation.

        Args:
            significant_digits: Positive number of significant digits
            rounding: Rounding mode applied to the last kept digit

        Returns:
            Decimal string, e.g. "0.333333" for 1/3 with 6 digits
        """
        require(isinstance(significant_digits, int) and significant_digits > 0,
                f"{significant_digits} is not a positive integer")
        if self.numerator == 0:
            return "0"

        # exponent of the leading digit: 10**exponent <= |value| < 10**(exponent + 1)
        magnitude = abs(self.numerator)
        exponent = len(str(magnitude // self.denominator)) - 1
        if magnitude < self.denominator:
            exponent = -1
            while magnitude * 10 ** (-exponent) < self.denominator:
                exponent -= 1

        scale = significant_digits - 1 - exponent
        if scale >= 0:
            scaled = _round_div(self.numerator * 10**scale, self.denominator, rounding)
        else:
            scaled = _round_div(self.numerator, self.denominator * 10 ** (-scale), rounding)

        if scale <= 0:
            return str(scaled * 10 ** (-scale))
        return strip_trailing_zeros(_format_scaled(scaled, scale))

    def to_fixed(self, decimal_places: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        """
        Format with exactly `decimal_places` digits after the decimal point.

        Args:
            decimal_places: Non-negative number of fractional digits
            rounding: Rounding mode applied to the last kept digit

        Returns:
            Decimal string, e.g. "1.50" for 3/2 with 2 places
        """
        require(isinstance(decimal_places, int) and decimal_places >= 0,
                f"{decimal_places} is not a non-negative integer")
        scaled = _round_div(self.numerator * 10**decimal_places, self.denominator, rounding)
        return _format_scaled(scaled, decimal_places)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.numerator}, {self.denominator})"
