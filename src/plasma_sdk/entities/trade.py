"""Trades: a route materialised against a fixed input or output amount."""
import logging
from typing import List, Optional, Protocol

from ..amounts.currency_amount import CurrencyAmount, NativeAmount, TokenAmount, to_currency_amount
from ..amounts.fraction import Fraction
from ..amounts.percent import Percent
from ..amounts.price import Price
from ..constants import TradeType
from ..errors import require
from .pair import Pair
from .route import Route

logger = logging.getLogger(__name__)


def compute_price_impact(mid_price: Price, input_amount: CurrencyAmount, output_amount: CurrencyAmount) -> Percent:
    """
    Relative shortfall of the output against the mid price quote of the input.

    price impact = (mid * input - output) / (mid * input)
    """
    exact_quote = mid_price.raw.multiply(input_amount.raw)
    slippage = exact_quote.subtract(output_amount.raw).divide(exact_quote)
    return Percent(slippage.numerator, slippage.denominator)


class InputOutput(Protocol):
    input_amount: CurrencyAmount
    output_amount: CurrencyAmount


def input_output_comparator(a: InputOutput, b: InputOutput) -> int:
    """
    Order by output amount descending, then input amount ascending.

    Both sides must trade the same input and output currencies.
    """
    require(a.input_amount.currency.equals(b.input_amount.currency), "INPUT_CURRENCY")
    require(a.output_amount.currency.equals(b.output_amount.currency), "OUTPUT_CURRENCY")
    if a.output_amount.equal_to(b.output_amount):
        if a.input_amount.equal_to(b.input_amount):
            return 0
        return -1 if a.input_amount.less_than(b.input_amount) else 1
    return 1 if a.output_amount.less_than(b.output_amount) else -1


def trade_comparator(a: "Trade", b: "Trade") -> int:
    """input_output_comparator, then lower price impact, then fewer hops."""
    io_comparison = input_output_comparator(a, b)
    if io_comparison != 0:
        return io_comparison

    if a.price_impact.less_than(b.price_impact):
        return -1
    if a.price_impact.greater_than(b.price_impact):
        return 1

    return len(a.route.path) - len(b.route.path)


class Trade:
    """
    A route executed for an exact input or an exact output amount.

    Does not account for slippage, i.e. trades that front run this one and
    move the price.
    """

    def __init__(self, route: Route, amount: CurrencyAmount, trade_type: TradeType):
        require(trade_type in (TradeType.EXACT_INPUT, TradeType.EXACT_OUTPUT), "Unsupported trade type")
        amounts: List[Optional[TokenAmount]] = [None] * len(route.path)
        next_pairs: List[Optional[Pair]] = [None] * len(route.pairs)

        if trade_type == TradeType.EXACT_INPUT:
            require(amount.currency.equals(route.input), "INPUT")
            amounts[0] = amount.wrapped()
            for i in range(len(route.path) - 1):
                amounts[i + 1], next_pairs[i] = route.pairs[i].get_output_amount(amounts[i])
        else:
            require(amount.currency.equals(route.output), "OUTPUT")
            amounts[-1] = amount.wrapped()
            for i in range(len(route.path) - 1, 0, -1):
                amounts[i - 1], next_pairs[i - 1] = route.pairs[i - 1].get_input_amount(amounts[i])

        if trade_type == TradeType.EXACT_INPUT:
            input_amount = amount
        elif route.input.is_native:
            input_amount = NativeAmount(route.input, amounts[0].raw)
        else:
            input_amount = amounts[0]

        if trade_type == TradeType.EXACT_OUTPUT:
            output_amount = amount
        elif route.output.is_native:
            output_amount = NativeAmount(route.output, amounts[-1].raw)
        else:
            output_amount = amounts[-1]

        self.route = route
        self.trade_type = trade_type
        self.input_amount: CurrencyAmount = input_amount
        self.output_amount: CurrencyAmount = output_amount
        self.execution_price = Price(input_amount.currency, output_amount.currency,
                                     input_amount.raw, output_amount.raw)
        self.next_mid_price = Price.from_route(Route(next_pairs, route.input))
        self.price_impact = compute_price_impact(route.mid_price, input_amount, output_amount)
        logger.debug(
            f"Built {trade_type.value} trade {route}: {input_amount.raw} -> {output_amount.raw}"
        )

    @classmethod
    def exact_in(cls, route: Route, amount_in: CurrencyAmount) -> "Trade":
        """Trade spending exactly amount_in along route."""
        return cls(route, amount_in, TradeType.EXACT_INPUT)

    @classmethod
    def exact_out(cls, route: Route, amount_out: CurrencyAmount) -> "Trade":
        """Trade receiving exactly amount_out along route."""
        return cls(route, amount_out, TradeType.EXACT_OUTPUT)

    @property
    def hops(self) -> int:
        return len(self.route.pairs)

    def minimum_amount_out(self, slippage_tolerance: Fraction) -> CurrencyAmount:
        """
        Least output acceptable under slippage_tolerance.

        Exact-output trades return their output unchanged.
        """
        require(not slippage_tolerance.less_than(0), "SLIPPAGE_TOLERANCE")
        if self.trade_type == TradeType.EXACT_OUTPUT:
            return self.output_amount
        adjusted = Fraction(1).add(slippage_tolerance).invert().multiply(self.output_amount.raw).quotient
        return to_currency_amount(self.output_amount.currency, adjusted)

    def maximum_amount_in(self, slippage_tolerance: Fraction) -> CurrencyAmount:
        """
        Most input acceptable under slippage_tolerance.

        Exact-input trades return their input unchanged.
        """
        require(not slippage_tolerance.less_than(0), "SLIPPAGE_TOLERANCE")
        if self.trade_type == TradeType.EXACT_INPUT:
            return self.input_amount
        adjusted = Fraction(1).add(slippage_tolerance).multiply(self.input_amount.raw).quotient
        return to_currency_amount(self.input_amount.currency, adjusted)

    def __repr__(self) -> str:
        return (f"Trade({self.trade_type.value}, {self.route}, "
                f"in={self.input_amount.raw}, out={self.output_amount.raw})")
