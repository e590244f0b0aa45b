"""Fractions rendered as percentages."""
from ..constants import Rounding
from .fraction import Fraction, strip_trailing_zeros

_100_PERCENT = Fraction(100)


class Percent(Fraction):
    """A fraction of one, e.g. Percent(1, 200) formats as 0.50."""

    def to_significant(self, significant_digits: int = 5, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.multiply(_100_PERCENT).to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 2, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.multiply(_100_PERCENT).to_fixed(decimal_places, rounding)

    def to_exact(self, max_places: int = 20) -> str:
        """Plain ratio (not scaled by 100), truncated past max_places digits."""
        return strip_trailing_zeros(Fraction(self.numerator, self.denominator).to_fixed(max_places, Rounding.ROUND_DOWN))
