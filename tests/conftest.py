"""Shared fixtures: mainnet tokens and a small pair graph."""
import pytest

from plasma_sdk.amounts.currency_amount import TokenAmount
from plasma_sdk.constants import ChainId, LiquidityProvider
from plasma_sdk.entities.currency import NATIVE, WNATIVE, Token
from plasma_sdk.entities.pair import Pair


USDC_ADDRESS = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
DAI_ADDRESS = "0x6B175474E89094C44Da98b954EedeAC495271d0F"


def make_pair(token_a: Token, reserve_a: int, token_b: Token, reserve_b: int,
              provider: LiquidityProvider = LiquidityProvider.UNISWAP) -> Pair:
    return Pair(TokenAmount(token_a, reserve_a), TokenAmount(token_b, reserve_b), provider)


@pytest.fixture
def usdc():
    return Token(ChainId.MAINNET, USDC_ADDRESS, 18, "USDC", "USD Coin")


@pytest.fixture
def dai():
    return Token(ChainId.MAINNET, DAI_ADDRESS, 18, "DAI", "DAI Stablecoin")


@pytest.fixture
def ether():
    return NATIVE[ChainId.MAINNET]


@pytest.fixture
def weth():
    return WNATIVE[ChainId.MAINNET]


@pytest.fixture
def tokens():
    """Four 18 decimal tokens with sequential addresses."""
    return [
        Token(ChainId.MAINNET, f"0x{i:040x}", 18, f"t{i - 1}")
        for i in range(1, 5)
    ]


@pytest.fixture
def pairs(tokens, weth):
    """
    The pair graph used by route, trade and search tests.

    Keys name the tokens joined by the pair.
    """
    t0, t1, t2, t3 = tokens
    return {
        "0_1": make_pair(t0, 1000, t1, 1000),
        "0_2": make_pair(t0, 1000, t2, 1100),
        "0_3": make_pair(t0, 1000, t3, 900),
        "1_2": make_pair(t1, 1200, t2, 1000),
        "1_3": make_pair(t1, 1200, t3, 1300),
        "weth_0": make_pair(weth, 1000, t0, 1000),
        "empty_0_1": make_pair(t0, 0, t1, 0),
    }
