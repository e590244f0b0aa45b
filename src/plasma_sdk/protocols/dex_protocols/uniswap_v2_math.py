"""
Uniswap V2 Math Implementation.

Implements the exact constant product formula (x * y = k) used by Uniswap V2
and its forks (SushiSwap, PlasmaSwap, etc.) in integer arithmetic, rounding
exactly the way the pair contracts do.
"""
from typing import Optional

from ...constants import FEE_DENOMINATOR, FEE_NUMERATOR, MINIMUM_LIQUIDITY, SolidityType
from ...errors import InsufficientInputAmountError, InsufficientReservesError
from ...utils.validation import validate_solidity_type_instance


def integer_sqrt(y: int) -> int:
    """
    Floor of the square root of a uint256, by Newton's method.

    Mirrors the Babylonian sqrt of the V2 pair contract so minted liquidity
    and fee growth match on-chain results bit for bit.
    """
    validate_solidity_type_instance(y, SolidityType.UINT256)
    z = 0
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
    elif y != 0:
        z = 1
    return z


class UniswapV2Math:
    """
    Exact implementation of Uniswap V2 constant product AMM math.

    All amounts are raw integers. Failures raise the swap errors the pair
    contract would revert with.
    """

    def __init__(self, fee_numerator: int = FEE_NUMERATOR, fee_denominator: int = FEE_DENOMINATOR):
        """
        Initialize Uniswap V2 math.

        Args:
            fee_numerator: Share of the input kept after the fee (997 for 0.3%)
            fee_denominator: Fee precision (1000 for Uniswap V2)
        """
        self.fee_numerator = fee_numerator
        self.fee_denominator = fee_denominator

    def calculate_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """
        Calculate output amount for a given input using exact Uniswap V2 formula.

        Formula: amountOut = (amountIn * 997 * reserveOut) / (reserveIn * 1000 + amountIn * 997)

        Args:
            amount_in: Amount of input token
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Amount of output token, floored

        Raises:
            InsufficientReservesError: If either reserve is empty
            InsufficientInputAmountError: If the output rounds down to zero
        """
        if reserve_in == 0 or reserve_out == 0:
            raise InsufficientReservesError("Pair has an empty reserve")

        amount_in_with_fee = amount_in * self.fee_numerator
        numerator = amount_in_with_fee * reserve_out
        denominator = reserve_in * self.fee_denominator + amount_in_with_fee
        amount_out = numerator // denominator

        if amount_out == 0:
            raise InsufficientInputAmountError("Input amount too small to produce output", amount_in=amount_in)
        return amount_out

    def calculate_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """
        Calculate required input amount for a desired output.

        Formula: amountIn = (reserveIn * amountOut * 1000) / ((reserveOut - amountOut) * 997) + 1

        The +1 rounds in the pool's favour so the quoted output is always reachable.

        Args:
            amount_out: Desired amount of output token
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Required amount of input token

        Raises:
            InsufficientReservesError: If a reserve is empty or amount_out >= reserve_out
        """
        if reserve_in == 0 or reserve_out == 0 or amount_out >= reserve_out:
            raise InsufficientReservesError(
                "Pair cannot provide the requested output",
                amount_out=amount_out,
                reserve_out=reserve_out,
            )

        numerator = reserve_in * amount_out * self.fee_denominator
        denominator = (reserve_out - amount_out) * self.fee_numerator
        return numerator // denominator + 1

    def calculate_liquidity_minted(self, total_supply: int, amount_0: int, amount_1: int,
                                   reserve_0: int, reserve_1: int) -> int:
        """
        Calculate LP shares minted for a deposit.

        First mint: sqrt(amount0 * amount1) - MINIMUM_LIQUIDITY.
        Later mints: min(amount0 * supply / reserve0, amount1 * supply / reserve1).

        Raises:
            InsufficientInputAmountError: If no liquidity would be minted
        """
        if total_supply == 0:
            liquidity = integer_sqrt(amount_0 * amount_1) - MINIMUM_LIQUIDITY
        else:
            liquidity = min(amount_0 * total_supply // reserve_0, amount_1 * total_supply // reserve_1)

        if liquidity <= 0:
            raise InsufficientInputAmountError("Insufficient liquidity minted", liquidity=liquidity)
        return liquidity

    def calculate_fee_liquidity(self, total_supply: int, reserve_0: int, reserve_1: int,
                                k_last: Optional[int]) -> int:
        """
        LP shares the protocol fee would mint since k_last (1/6 of the growth in sqrt(k)).

        Returns 0 when k_last is zero or sqrt(k) has not grown.
        """
        if not k_last:
            return 0
        root_k = integer_sqrt(reserve_0 * reserve_1)
        root_k_last = integer_sqrt(k_last)
        if root_k <= root_k_last:
            return 0
        numerator = total_supply * (root_k - root_k_last)
        denominator = root_k * 5 + root_k_last
        return numerator // denominator

    def calculate_liquidity_value(self, liquidity: int, reserve: int, total_supply: int) -> int:
        """Pro-rata share of reserve redeemed by liquidity out of total_supply."""
        return liquidity * reserve // total_supply

    def calculate_invariant(self, reserve_0: int, reserve_1: int) -> int:
        """
        Calculate the invariant k = x * y.

        Args:
            reserve_0: Reserve of token 0
            reserve_1: Reserve of token 1

        Returns:
            The constant product invariant
        """
        return reserve_0 * reserve_1
