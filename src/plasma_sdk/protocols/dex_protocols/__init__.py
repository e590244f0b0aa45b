"""Constant product AMM math."""
from .uniswap_v2_math import UniswapV2Math, integer_sqrt

__all__ = ["UniswapV2Math", "integer_sqrt"]
