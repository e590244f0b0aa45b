"""Unit tests for Pair, pair address derivation and the address cache."""
import threading

import pytest

from plasma_sdk.amounts.currency_amount import TokenAmount
from plasma_sdk.amounts.fraction import Fraction
from plasma_sdk.constants import ChainId, LiquidityProvider
from plasma_sdk.entities.currency import WNATIVE, Token
from plasma_sdk.entities.pair import Pair, PairAddressCache, compute_pair_address
from plasma_sdk.errors import (
    ChainMismatchError,
    InsufficientInputAmountError,
    InsufficientReservesError,
    PreconditionError,
    UnsupportedProviderError,
)
from plasma_sdk.protocols.contracts import require_lp_configuration

USDC_DAI_PAIR = "0xAE461cA67B15dc8dc81CE7615e0320dA1A9aB8D5"


def build(token_a, reserve_a, token_b, reserve_b, provider=LiquidityProvider.UNISWAP, cache=None):
    return Pair(TokenAmount(token_a, reserve_a), TokenAmount(token_b, reserve_b), provider, cache)


class TestPairAddress:
    """Test deterministic CREATE2 pair addresses."""

    def test_known_mainnet_address(self, usdc, dai):
        assert Pair.get_address(usdc, dai, LiquidityProvider.UNISWAP) == USDC_DAI_PAIR

    def test_independent_of_argument_order(self, usdc, dai):
        assert Pair.get_address(dai, usdc, LiquidityProvider.UNISWAP) == USDC_DAI_PAIR

    def test_compute_pair_address(self, usdc, dai):
        conf = require_lp_configuration(ChainId.MAINNET, LiquidityProvider.UNISWAP)
        address = compute_pair_address(conf.factory, dai.address, usdc.address, conf.init_code_hash)
        assert address == USDC_DAI_PAIR

    def test_providers_derive_different_addresses(self, usdc, dai):
        sushi = Pair.get_address(usdc, dai, LiquidityProvider.SUSHISWAP)
        assert sushi != USDC_DAI_PAIR

    def test_unsupported_provider(self):
        token_a = Token(ChainId.MUMBAI, "0x0000000000000000000000000000000000000001", 18)
        token_b = Token(ChainId.MUMBAI, "0x0000000000000000000000000000000000000002", 18)
        with pytest.raises(UnsupportedProviderError) as exc_info:
            Pair.get_address(token_a, token_b, LiquidityProvider.UNISWAP)
        assert exc_info.value.chain_id == ChainId.MUMBAI
        assert exc_info.value.provider == LiquidityProvider.UNISWAP

    def test_liquidity_token(self, usdc, dai):
        pair = build(usdc, 100, dai, 100)
        assert pair.address == USDC_DAI_PAIR
        assert pair.liquidity_token.decimals == 18
        assert pair.liquidity_token.symbol == "UNI-V2"


class TestPairAddressCache:
    """Test the thread-safe address memo."""

    def test_hits_and_misses(self, usdc, dai):
        cache = PairAddressCache()
        first = Pair.get_address(usdc, dai, LiquidityProvider.UNISWAP, cache)
        second = Pair.get_address(dai, usdc, LiquidityProvider.UNISWAP, cache)

        assert first == second == USDC_DAI_PAIR
        metrics = cache.get_metrics()
        assert metrics["misses"] == 1
        assert metrics["hits"] == 1
        assert metrics["size"] == 1
        assert len(cache) == 1

    def test_clear(self, usdc, dai):
        cache = PairAddressCache()
        Pair.get_address(usdc, dai, LiquidityProvider.UNISWAP, cache)
        cache.clear()
        assert len(cache) == 0

    def test_keyed_by_provider(self, usdc, dai):
        cache = PairAddressCache()
        Pair.get_address(usdc, dai, LiquidityProvider.UNISWAP, cache)
        Pair.get_address(usdc, dai, LiquidityProvider.SUSHISWAP, cache)
        assert len(cache) == 2

    def test_concurrent_lookups_agree(self, usdc, dai):
        cache = PairAddressCache()
        results = []

        def lookup():
            results.append(Pair.get_address(usdc, dai, LiquidityProvider.UNISWAP, cache))

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == [USDC_DAI_PAIR] * 8
        assert len(cache) == 1


class TestPairOrdering:
    """Test canonical token ordering and accessors."""

    def test_tokens_on_different_chains(self, usdc):
        with pytest.raises(ChainMismatchError, match="CHAIN_IDS"):
            build(usdc, 100, WNATIVE[ChainId.RINKEBY], 100)

    def test_same_token_twice(self, usdc):
        with pytest.raises(PreconditionError, match="ADDRESSES"):
            build(usdc, 100, usdc, 100)

    def test_token0_sorts_before(self, usdc, dai):
        assert build(usdc, 100, dai, 100).token0 == dai
        assert build(dai, 100, usdc, 100).token0 == dai

    def test_token1_sorts_after(self, usdc, dai):
        assert build(usdc, 100, dai, 100).token1 == usdc
        assert build(dai, 100, usdc, 100).token1 == usdc

    def test_reserves_follow_tokens(self, usdc, dai):
        for pair in (build(usdc, 100, dai, 101), build(dai, 101, usdc, 100)):
            assert pair.reserve0 == TokenAmount(dai, 101)
            assert pair.reserve1 == TokenAmount(usdc, 100)

    def test_reserve_of(self, usdc, dai, weth):
        pair = build(dai, 101, usdc, 100)
        assert pair.reserve_of(usdc) == TokenAmount(usdc, 100)
        with pytest.raises(PreconditionError, match="TOKEN"):
            pair.reserve_of(weth)

    def test_chain_id(self, usdc, dai):
        assert build(usdc, 100, dai, 100).chain_id == ChainId.MAINNET

    def test_involves_token(self, usdc, dai, weth):
        pair = build(usdc, 100, dai, 100)
        assert pair.involves_token(usdc)
        assert pair.involves_token(dai)
        assert not pair.involves_token(weth)


class TestPairPrices:
    """Test mid prices."""

    def test_token0_price(self, usdc, dai):
        for pair in (build(usdc, 101, dai, 100), build(dai, 100, usdc, 101)):
            price = pair.token0_price
            assert price.base_currency == dai
            assert price.quote_currency == usdc
            assert price.raw.equal_to(Fraction(101, 100))

    def test_token1_price(self, usdc, dai):
        for pair in (build(usdc, 101, dai, 100), build(dai, 100, usdc, 101)):
            price = pair.token1_price
            assert price.base_currency == usdc
            assert price.quote_currency == dai
            assert price.raw.equal_to(Fraction(100, 101))

    def test_price_of(self, usdc, dai, weth):
        pair = build(usdc, 101, dai, 100)
        assert pair.price_of(dai).raw.equal_to(pair.token0_price.raw)
        assert pair.price_of(usdc).raw.equal_to(pair.token1_price.raw)
        with pytest.raises(PreconditionError, match="TOKEN"):
            pair.price_of(weth)


class TestPairSwaps:
    """Test swap quotes and the post-swap pair."""

    def test_get_output_amount(self, usdc, dai):
        pair = build(usdc, 1_000_000, dai, 1_000_000)
        amount_out, next_pair = pair.get_output_amount(TokenAmount(usdc, 1000))

        assert amount_out == TokenAmount(dai, 996)
        assert next_pair.reserve_of(usdc).raw == 1_001_000
        assert next_pair.reserve_of(dai).raw == 1_000_000 - 996
        # snapshot is unchanged
        assert pair.reserve_of(usdc).raw == 1_000_000

    def test_get_input_amount(self, usdc, dai):
        pair = build(usdc, 1000, dai, 1000)
        amount_in, next_pair = pair.get_input_amount(TokenAmount(dai, 100))

        assert amount_in == TokenAmount(usdc, 112)
        assert next_pair.reserve_of(usdc).raw == 1112
        assert next_pair.reserve_of(dai).raw == 900

    def test_output_amount_small_input(self, usdc, dai):
        pair = build(usdc, 101, dai, 100)
        with pytest.raises(InsufficientInputAmountError):
            pair.get_output_amount(TokenAmount(usdc, 1))

    def test_output_amount_empty_reserve(self, usdc, dai):
        pair = build(usdc, 0, dai, 100)
        with pytest.raises(InsufficientReservesError):
            pair.get_output_amount(TokenAmount(usdc, 100))

    def test_input_amount_exceeds_reserve(self, usdc, dai):
        pair = build(usdc, 1000, dai, 1000)
        with pytest.raises(InsufficientReservesError):
            pair.get_input_amount(TokenAmount(dai, 1000))

    def test_quote_returns_result_instead_of_raising(self, usdc, dai):
        pair = build(usdc, 1000, dai, 1000)
        failed = pair.quote_input_amount(TokenAmount(dai, 5000))
        assert not failed.ok
        assert isinstance(failed.error, InsufficientReservesError)
        assert failed.amount is None

        succeeded = pair.quote_output_amount(TokenAmount(usdc, 100))
        assert succeeded.ok
        assert succeeded.amount == TokenAmount(dai, 90)

    def test_foreign_token_raises(self, usdc, dai, weth):
        pair = build(usdc, 1000, dai, 1000)
        with pytest.raises(PreconditionError, match="TOKEN"):
            pair.quote_output_amount(TokenAmount(weth, 100))


class TestPairLiquidity:
    """Test liquidity minted and liquidity value."""

    def test_liquidity_minted_first_deposit(self, usdc, dai):
        pair = build(usdc, 0, dai, 0)
        supply = TokenAmount(pair.liquidity_token, 0)

        with pytest.raises(InsufficientInputAmountError):
            pair.get_liquidity_minted(supply, TokenAmount(usdc, 1000), TokenAmount(dai, 1000))
        with pytest.raises(InsufficientInputAmountError):
            pair.get_liquidity_minted(supply, TokenAmount(usdc, 1_000_000), TokenAmount(dai, 1))

        minted = pair.get_liquidity_minted(supply, TokenAmount(usdc, 1001), TokenAmount(dai, 1001))
        assert minted.raw == 1
        assert minted.token == pair.liquidity_token

    def test_liquidity_minted_later_deposit(self, usdc, dai):
        pair = build(usdc, 10_000, dai, 10_000)
        minted = pair.get_liquidity_minted(
            TokenAmount(pair.liquidity_token, 10_000), TokenAmount(usdc, 2000), TokenAmount(dai, 2000)
        )
        assert minted.raw == 2000

    def test_liquidity_minted_wrong_supply_token(self, usdc, dai):
        pair = build(usdc, 10_000, dai, 10_000)
        with pytest.raises(PreconditionError, match="LIQUIDITY"):
            pair.get_liquidity_minted(TokenAmount(usdc, 10_000), TokenAmount(usdc, 1), TokenAmount(dai, 1))

    def test_liquidity_value_fee_off(self, usdc, dai):
        pair = build(usdc, 1000, dai, 1000)
        lp = pair.liquidity_token

        assert pair.get_liquidity_value(usdc, TokenAmount(lp, 1000), TokenAmount(lp, 1000)).raw == 1000
        assert pair.get_liquidity_value(usdc, TokenAmount(lp, 1000), TokenAmount(lp, 500)).raw == 500
        value = pair.get_liquidity_value(dai, TokenAmount(lp, 1000), TokenAmount(lp, 1000))
        assert value.raw == 1000
        assert value.token == dai

    def test_liquidity_value_fee_on(self, usdc, dai):
        pair = build(usdc, 1000, dai, 1000)
        lp = pair.liquidity_token
        value = pair.get_liquidity_value(usdc, TokenAmount(lp, 500), TokenAmount(lp, 500), True, "250000")
        assert value.raw == 917

    def test_liquidity_value_fee_on_requires_k_last(self, usdc, dai):
        pair = build(usdc, 1000, dai, 1000)
        lp = pair.liquidity_token
        with pytest.raises(PreconditionError, match="K_LAST"):
            pair.get_liquidity_value(usdc, TokenAmount(lp, 500), TokenAmount(lp, 500), fee_on=True)

    def test_liquidity_above_supply_rejected(self, usdc, dai):
        pair = build(usdc, 1000, dai, 1000)
        lp = pair.liquidity_token
        with pytest.raises(PreconditionError, match="LIQUIDITY"):
            pair.get_liquidity_value(usdc, TokenAmount(lp, 500), TokenAmount(lp, 501))
