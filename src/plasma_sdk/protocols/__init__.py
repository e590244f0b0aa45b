"""Liquidity provider configurations and AMM math."""
from .contracts import (
    LP_CONFIGURATIONS,
    LpConfiguration,
    get_lp_configuration,
    get_supported_providers,
    is_supported_chain,
    require_lp_configuration,
)
from .dex_protocols import UniswapV2Math, integer_sqrt

__all__ = [
    "LP_CONFIGURATIONS",
    "LpConfiguration",
    "get_lp_configuration",
    "get_supported_providers",
    "is_supported_chain",
    "require_lp_configuration",
    "UniswapV2Math",
    "integer_sqrt",
]
