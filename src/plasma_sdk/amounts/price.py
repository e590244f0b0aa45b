"""Exchange rates between two currencies."""
from typing import TYPE_CHECKING

from ..constants import BigintIsh, Rounding
from ..entities.currency import Currency
from ..errors import require
from .currency_amount import CurrencyAmount, to_currency_amount
from .fraction import Fraction

if TYPE_CHECKING:
    from ..entities.route import Route


class Price(Fraction):
    """
    Amount of quote currency per unit of base currency.

    The fraction itself holds the raw ratio (quote raw / base raw);
    `adjusted` rescales it by the currencies' decimals for display.
    """

    def __init__(self, base_currency: Currency, quote_currency: Currency,
                 denominator: BigintIsh, numerator: BigintIsh):
        super().__init__(numerator, denominator)
        self.base_currency = base_currency
        self.quote_currency = quote_currency
        self.scalar = Fraction(10**base_currency.decimals, 10**quote_currency.decimals)

    @classmethod
    def from_route(cls, route: "Route") -> "Price":
        """Product of the per-hop spot prices along route, oriented by its path."""
        prices = []
        for i, pair in enumerate(route.pairs):
            if route.path[i].equals(pair.token0):
                prices.append(cls(pair.reserve0.currency, pair.reserve1.currency,
                                  pair.reserve0.raw, pair.reserve1.raw))
            else:
                prices.append(cls(pair.reserve1.currency, pair.reserve0.currency,
                                  pair.reserve1.raw, pair.reserve0.raw))
        price = prices[0]
        for next_price in prices[1:]:
            price = price.multiply(next_price)
        return price

    @property
    def raw(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    @property
    def adjusted(self) -> Fraction:
        return super().multiply(self.scalar)

    def invert(self) -> "Price":
        return Price(self.quote_currency, self.base_currency, self.numerator, self.denominator)

    def multiply(self, other: "Price") -> "Price":
        require(self.quote_currency.equals(other.base_currency), "TOKEN",
                quote=self.quote_currency.symbol, base=other.base_currency.symbol)
        fraction = super().multiply(other)
        return Price(self.base_currency, other.quote_currency, fraction.denominator, fraction.numerator)

    def quote(self, currency_amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base currency into the quote currency."""
        require(currency_amount.currency.equals(self.base_currency), "TOKEN",
                currency=currency_amount.currency.symbol, base=self.base_currency.symbol)
        return to_currency_amount(self.quote_currency, super().multiply(currency_amount.raw).quotient)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 4, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_fixed(decimal_places, rounding)

    def __repr__(self) -> str:
        return (f"Price({self.base_currency.symbol}->{self.quote_currency.symbol}, "
                f"{self.numerator}/{self.denominator})")
