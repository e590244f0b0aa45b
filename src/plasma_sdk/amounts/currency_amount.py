"""Currency-tagged amounts built on exact fractions."""
from typing import Optional

from ..constants import BigintIsh, Rounding, SolidityType
from ..entities.currency import NATIVE, WNATIVE, Currency, Native, Token
from ..errors import CurrencyMismatchError, require
from ..utils.amounts import parse_bigint_ish
from ..utils.validation import validate_solidity_type_instance
from .fraction import Fraction, strip_trailing_zeros


class CurrencyAmount(Fraction):
    """
    A raw uint256 amount of a currency, valued as raw / 10**decimals.

    Amounts only combine with amounts of an equal currency. Use TokenAmount or
    NativeAmount (or to_currency_amount) to build one.
    """

    def __init__(self, currency: Currency, amount: BigintIsh):
        raw = parse_bigint_ish(amount)
        validate_solidity_type_instance(raw, SolidityType.UINT256)
        super().__init__(raw, 10**currency.decimals)
        self.currency = currency

    @property
    def raw(self) -> int:
        return self.numerator

    def _check_currency(self, other: "CurrencyAmount") -> None:
        if not self.currency.equals(other.currency):
            raise CurrencyMismatchError(
                "Cannot combine amounts of different currencies",
                left=self.currency.symbol,
                right=other.currency.symbol,
            )

    def add(self, other: "CurrencyAmount") -> "CurrencyAmount":
        self._check_currency(other)
        return self.__class__(self.currency, self.raw + other.raw)

    def subtract(self, other: "CurrencyAmount") -> "CurrencyAmount":
        self._check_currency(other)
        return self.__class__(self.currency, self.raw - other.raw)

    def wrapped(self) -> "TokenAmount":
        """This amount expressed in the chain's wrapped-native token when native."""
        if isinstance(self, TokenAmount):
            return self
        return TokenAmount(self.currency.wrapped(), self.raw)

    def unwrapped(self) -> "CurrencyAmount":
        """This amount expressed in the native currency when it is wrapped-native."""
        wrapped_native = WNATIVE.get(self.currency.chain_id)
        if wrapped_native is not None and self.currency.equals(wrapped_native):
            return NativeAmount(NATIVE[self.currency.chain_id], self.raw)
        return self

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        return super().to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: Optional[int] = None, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        if decimal_places is None:
            decimal_places = self.currency.decimals
        require(decimal_places <= self.currency.decimals, "DECIMALS",
                decimal_places=decimal_places, decimals=self.currency.decimals)
        return super().to_fixed(decimal_places, rounding)

    def to_exact(self) -> str:
        """Exact decimal value without trailing zeros, e.g. "1.5"."""
        return strip_trailing_zeros(super().to_fixed(self.currency.decimals, Rounding.ROUND_DOWN))

    def __eq__(self, other) -> bool:
        if not isinstance(other, CurrencyAmount):
            return NotImplemented
        return self.currency.equals(other.currency) and self.raw == other.raw

    def __hash__(self) -> int:
        return hash((self.currency, self.raw))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.currency.symbol or self.currency.chain_id}, {self.raw})"


class TokenAmount(CurrencyAmount):
    """An amount of an ERC20 token."""

    def __init__(self, token: Token, amount: BigintIsh):
        require(isinstance(token, Token), "TokenAmount requires a Token", currency=token)
        super().__init__(token, amount)

    @property
    def token(self) -> Token:
        return self.currency


class NativeAmount(CurrencyAmount):
    """An amount of the chain's native currency, in wei-like units."""

    def __init__(self, currency: Native, amount: BigintIsh):
        require(isinstance(currency, Native), "NativeAmount requires a Native currency", currency=currency)
        super().__init__(currency, amount)

    @classmethod
    def native(cls, chain_id: int, amount: BigintIsh) -> "NativeAmount":
        """Amount of the canonical native currency of chain_id."""
        return cls(Native.on_chain(chain_id), amount)


def to_currency_amount(currency: Currency, amount: BigintIsh) -> CurrencyAmount:
    """TokenAmount for tokens, NativeAmount for native currencies."""
    if currency.is_token:
        return TokenAmount(currency, amount)
    return NativeAmount(currency, amount)
