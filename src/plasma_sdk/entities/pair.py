"""Constant product liquidity pairs and their deterministic addresses."""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from eth_abi.packed import encode_packed
from web3 import Web3

from ..amounts.currency_amount import TokenAmount
from ..amounts.price import Price
from ..constants import (
    LIQUIDITY_TOKEN_NAME,
    LIQUIDITY_TOKEN_SYMBOL,
    BigintIsh,
    LiquidityProvider,
)
from ..errors import (
    InsufficientInputAmountError,
    InsufficientReservesError,
    PlasmaSDKError,
    require,
)
from ..protocols.contracts import require_lp_configuration
from ..protocols.dex_protocols.uniswap_v2_math import UniswapV2Math
from ..utils.amounts import parse_bigint_ish
from .currency import Token

logger = logging.getLogger(__name__)

PairKey = Tuple[int, int, str, str]


def compute_pair_address(factory: str, token_0: str, token_1: str, init_code_hash: str) -> str:
    """
    CREATE2 address of the pair for two already sorted token addresses.

    address = keccak256(0xff ++ factory ++ keccak256(token0 ++ token1) ++ init_code_hash)[12:]
    """
    salt = Web3.keccak(encode_packed(["address", "address"], [token_0, token_1]))
    digest = Web3.keccak(
        b"\xff"
        + Web3.to_bytes(hexstr=factory)
        + bytes(salt)
        + Web3.to_bytes(hexstr=init_code_hash)
    )
    return Web3.to_checksum_address("0x" + bytes(digest[12:]).hex())


class PairAddressCache:
    """
    Thread-safe memo of derived pair addresses.

    Keyed by (chain, provider, token0, token1). Derivation is deterministic,
    so concurrent misses for one key may compute twice but always store the
    same value.
    """

    def __init__(self):
        self._addresses: Dict[PairKey, str] = {}
        self._lock = threading.Lock()
        self._metrics = {
            "hits": 0,
            "misses": 0,
        }

    def get_or_compute(self, key: PairKey, compute: Callable[[], str]) -> str:
        with self._lock:
            address = self._addresses.get(key)
            if address is not None:
                self._metrics["hits"] += 1
                return address
            self._metrics["misses"] += 1

        address = compute()
        logger.debug(f"Derived pair address {address} for {key}")

        with self._lock:
            return self._addresses.setdefault(key, address)

    def clear(self) -> None:
        with self._lock:
            self._addresses.clear()

    def get_metrics(self) -> Dict[str, int]:
        with self._lock:
            return {**self._metrics, "size": len(self._addresses)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._addresses)


default_address_cache = PairAddressCache()

_V2_MATH = UniswapV2Math()


@dataclass(frozen=True)
class SwapResult:
    """
    Outcome of quoting a swap through a pair.

    On success `amount` is the quoted amount and `pair` the pair with updated
    reserves; on failure `error` holds the swap error and both are None.
    """
    amount: Optional[TokenAmount] = None
    pair: Optional["Pair"] = None
    error: Optional[PlasmaSDKError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Tuple[TokenAmount, "Pair"]:
        """Return (amount, pair) or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.amount, self.pair


class Pair:
    """
    A two-token constant product pool snapshot.

    Tokens are kept in canonical order (token0 sorts before token1 by
    lowercase address). Reserves never change: quoting a swap returns a new
    Pair holding the post-swap reserves.
    """

    def __init__(
        self,
        token_amount_a: TokenAmount,
        token_amount_b: TokenAmount,
        liquidity_provider: LiquidityProvider,
        address_cache: Optional[PairAddressCache] = None,
    ):
        if token_amount_a.token.sorts_before(token_amount_b.token):
            token_amounts = (token_amount_a, token_amount_b)
        else:
            token_amounts = (token_amount_b, token_amount_a)

        self.liquidity_provider = LiquidityProvider(liquidity_provider)
        self.address_cache = address_cache if address_cache is not None else default_address_cache
        self.liquidity_token = Pair.to_token_of_liquidity(
            token_amounts[0].token, token_amounts[1].token, self.liquidity_provider, self.address_cache
        )
        self._token_amounts: Tuple[TokenAmount, TokenAmount] = token_amounts

    @staticmethod
    def get_address(
        token_a: Token,
        token_b: Token,
        liquidity_provider: LiquidityProvider,
        address_cache: Optional[PairAddressCache] = None,
    ) -> str:
        """
        Deterministic pair address of two tokens for a liquidity provider.

        Independent of argument order.

        Raises:
            UnsupportedProviderError: If the provider has no factory on the tokens' chain
        """
        token_0, token_1 = (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)
        conf = require_lp_configuration(token_0.chain_id, liquidity_provider)
        cache = address_cache if address_cache is not None else default_address_cache
        key = (int(token_0.chain_id), int(liquidity_provider), token_0.address, token_1.address)
        return cache.get_or_compute(
            key,
            lambda: compute_pair_address(conf.factory, token_0.address, token_1.address, conf.init_code_hash),
        )

    @staticmethod
    def to_token_of_liquidity(
        token_a: Token,
        token_b: Token,
        liquidity_provider: LiquidityProvider,
        address_cache: Optional[PairAddressCache] = None,
    ) -> Token:
        """The LP share token of the pair of token_a and token_b."""
        return Token(
            token_a.chain_id,
            Pair.get_address(token_a, token_b, liquidity_provider, address_cache),
            18,
            LIQUIDITY_TOKEN_SYMBOL[liquidity_provider],
            LIQUIDITY_TOKEN_NAME[liquidity_provider],
        )

    @property
    def address(self) -> str:
        return self.liquidity_token.address

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def token0(self) -> Token:
        return self._token_amounts[0].token

    @property
    def token1(self) -> Token:
        return self._token_amounts[1].token

    @property
    def reserve0(self) -> TokenAmount:
        return self._token_amounts[0]

    @property
    def reserve1(self) -> TokenAmount:
        return self._token_amounts[1]

    @property
    def token0_price(self) -> Price:
        """Mid price of token0 in terms of token1 (reserve1 / reserve0)."""
        return Price(self.token0, self.token1, self.reserve0.raw, self.reserve1.raw)

    @property
    def token1_price(self) -> Price:
        """Mid price of token1 in terms of token0 (reserve0 / reserve1)."""
        return Price(self.token1, self.token0, self.reserve1.raw, self.reserve0.raw)

    def involves_token(self, token: Token) -> bool:
        return token.equals(self.token0) or token.equals(self.token1)

    def price_of(self, token: Token) -> Price:
        require(self.involves_token(token), "TOKEN", token=token.address)
        return self.token0_price if token.equals(self.token0) else self.token1_price

    def reserve_of(self, token: Token) -> TokenAmount:
        require(self.involves_token(token), "TOKEN", token=token.address)
        return self.reserve0 if token.equals(self.token0) else self.reserve1

    def other_token(self, token: Token) -> Token:
        require(self.involves_token(token), "TOKEN", token=token.address)
        return self.token1 if token.equals(self.token0) else self.token0

    @property
    def has_empty_reserve(self) -> bool:
        return self.reserve0.raw == 0 or self.reserve1.raw == 0

    def _with_reserves(self, amount_a: TokenAmount, amount_b: TokenAmount) -> "Pair":
        return Pair(amount_a, amount_b, self.liquidity_provider, self.address_cache)

    def quote_output_amount(self, input_amount: TokenAmount) -> SwapResult:
        """
        Quote the output of selling input_amount, without raising on swap failures.

        Precondition violations (a token foreign to the pair) still raise.
        """
        require(self.involves_token(input_amount.token), "TOKEN", token=input_amount.token.address)
        input_reserve = self.reserve_of(input_amount.token)
        output_reserve = self.reserve_of(self.other_token(input_amount.token))
        if self.has_empty_reserve:
            return SwapResult(error=InsufficientReservesError("Pair has an empty reserve", pair=self.address))

        try:
            raw_out = _V2_MATH.calculate_amount_out(input_amount.raw, input_reserve.raw, output_reserve.raw)
        except InsufficientInputAmountError as e:
            return SwapResult(error=e)

        output_amount = TokenAmount(output_reserve.token, raw_out)
        next_pair = self._with_reserves(input_reserve.add(input_amount), output_reserve.subtract(output_amount))
        return SwapResult(amount=output_amount, pair=next_pair)

    def quote_input_amount(self, output_amount: TokenAmount) -> SwapResult:
        """
        Quote the input needed to buy output_amount, without raising on swap failures.

        Precondition violations (a token foreign to the pair) still raise.
        """
        require(self.involves_token(output_amount.token), "TOKEN", token=output_amount.token.address)
        output_reserve = self.reserve_of(output_amount.token)
        input_reserve = self.reserve_of(self.other_token(output_amount.token))

        try:
            raw_in = _V2_MATH.calculate_amount_in(output_amount.raw, input_reserve.raw, output_reserve.raw)
        except InsufficientReservesError as e:
            return SwapResult(error=e)

        input_amount = TokenAmount(input_reserve.token, raw_in)
        next_pair = self._with_reserves(input_reserve.add(input_amount), output_reserve.subtract(output_amount))
        return SwapResult(amount=input_amount, pair=next_pair)

    def get_output_amount(self, input_amount: TokenAmount) -> Tuple[TokenAmount, "Pair"]:
        """
        Output amount for selling input_amount, and the pair after the swap.

        Raises:
            InsufficientReservesError: If either reserve is empty
            InsufficientInputAmountError: If the output rounds down to zero
        """
        return self.quote_output_amount(input_amount).unwrap()

    def get_input_amount(self, output_amount: TokenAmount) -> Tuple[TokenAmount, "Pair"]:
        """
        Input amount needed to buy output_amount, and the pair after the swap.

        Raises:
            InsufficientReservesError: If a reserve is empty or output_amount >= its reserve
        """
        return self.quote_input_amount(output_amount).unwrap()

    def get_liquidity_minted(
        self,
        total_supply: TokenAmount,
        token_amount_a: TokenAmount,
        token_amount_b: TokenAmount,
    ) -> TokenAmount:
        """
        LP tokens minted for depositing token_amount_a and token_amount_b.

        Raises:
            InsufficientInputAmountError: If no liquidity would be minted
        """
        require(total_supply.token.equals(self.liquidity_token), "LIQUIDITY")
        if token_amount_a.token.sorts_before(token_amount_b.token):
            amount_0, amount_1 = token_amount_a, token_amount_b
        else:
            amount_0, amount_1 = token_amount_b, token_amount_a
        require(amount_0.token.equals(self.token0) and amount_1.token.equals(self.token1), "TOKEN")

        liquidity = _V2_MATH.calculate_liquidity_minted(
            total_supply.raw, amount_0.raw, amount_1.raw, self.reserve0.raw, self.reserve1.raw
        )
        return TokenAmount(self.liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: TokenAmount,
        liquidity: TokenAmount,
        fee_on: bool = False,
        k_last: Optional[BigintIsh] = None,
    ) -> TokenAmount:
        """
        Amount of token redeemable for burning liquidity.

        With fee_on, total_supply is first grown by the LP shares the protocol
        fee would mint since k_last.
        """
        require(self.involves_token(token), "TOKEN", token=token.address)
        require(total_supply.token.equals(self.liquidity_token), "TOTAL_SUPPLY")
        require(liquidity.token.equals(self.liquidity_token), "LIQUIDITY")
        require(liquidity.raw <= total_supply.raw, "LIQUIDITY")

        total_supply_adjusted = total_supply
        if fee_on:
            require(k_last is not None, "K_LAST")
            fee_liquidity = _V2_MATH.calculate_fee_liquidity(
                total_supply.raw, self.reserve0.raw, self.reserve1.raw, parse_bigint_ish(k_last)
            )
            if fee_liquidity:
                total_supply_adjusted = total_supply.add(TokenAmount(self.liquidity_token, fee_liquidity))

        return TokenAmount(
            token,
            _V2_MATH.calculate_liquidity_value(liquidity.raw, self.reserve_of(token).raw, total_supply_adjusted.raw),
        )

    def __repr__(self) -> str:
        return (f"Pair({self.token0.symbol}:{self.reserve0.raw}, {self.token1.symbol}:{self.reserve1.raw}, "
                f"{self.liquidity_provider.name})")
