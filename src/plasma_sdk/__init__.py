"""Pricing and routing core for constant product DEX pairs."""
from .constants import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    MINIMUM_LIQUIDITY,
    ZERO_ADDRESS,
    BigintIsh,
    ChainId,
    LiquidityProvider,
    Rounding,
    SolidityType,
    TradeType,
)
from .errors import (
    ChainMismatchError,
    CurrencyMismatchError,
    InsufficientInputAmountError,
    InsufficientReservesError,
    InvalidAddressError,
    InvalidPathError,
    PlasmaSDKError,
    PreconditionError,
    SolidityRangeError,
    UnsupportedProviderError,
)
from .utils import (
    format_hex_string,
    get_exact_input_amount,
    parse_bigint_ish,
    validate_and_parse_address,
    validate_solidity_type_instance,
)
from .amounts.fraction import Fraction
from .amounts.percent import Percent
from .entities.currency import NATIVE, WNATIVE, Currency, Native, Token
from .amounts.currency_amount import CurrencyAmount, NativeAmount, TokenAmount, to_currency_amount
from .amounts.price import Price
from .protocols import (
    LpConfiguration,
    UniswapV2Math,
    get_lp_configuration,
    get_supported_providers,
    is_supported_chain,
    require_lp_configuration,
)
from .entities.pair import Pair, PairAddressCache, SwapResult, compute_pair_address
from .entities.route import Route
from .entities.trade import Trade, compute_price_impact, input_output_comparator, trade_comparator
from .pathfinding import (
    BestTradeConfig,
    BestTradeSearch,
    SearchStats,
    best_trade_exact_in,
    best_trade_exact_out,
    sorted_insert,
)
from .config import Settings, configure_logging, settings

__version__ = "0.1.0"

__all__ = [
    # Constants
    "FEE_DENOMINATOR",
    "FEE_NUMERATOR",
    "MINIMUM_LIQUIDITY",
    "ZERO_ADDRESS",
    "BigintIsh",
    "ChainId",
    "LiquidityProvider",
    "Rounding",
    "SolidityType",
    "TradeType",
    # Errors
    "ChainMismatchError",
    "CurrencyMismatchError",
    "InsufficientInputAmountError",
    "InsufficientReservesError",
    "InvalidAddressError",
    "InvalidPathError",
    "PlasmaSDKError",
    "PreconditionError",
    "SolidityRangeError",
    "UnsupportedProviderError",
    # Utils
    "format_hex_string",
    "get_exact_input_amount",
    "parse_bigint_ish",
    "validate_and_parse_address",
    "validate_solidity_type_instance",
    # Amounts
    "Fraction",
    "Percent",
    "CurrencyAmount",
    "NativeAmount",
    "TokenAmount",
    "to_currency_amount",
    "Price",
    # Entities
    "NATIVE",
    "WNATIVE",
    "Currency",
    "Native",
    "Token",
    "Pair",
    "PairAddressCache",
    "SwapResult",
    "compute_pair_address",
    "Route",
    "Trade",
    "compute_price_impact",
    "input_output_comparator",
    "trade_comparator",
    # Protocols
    "LpConfiguration",
    "UniswapV2Math",
    "get_lp_configuration",
    "get_supported_providers",
    "is_supported_chain",
    "require_lp_configuration",
    # Pathfinding
    "BestTradeConfig",
    "BestTradeSearch",
    "SearchStats",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "sorted_insert",
    # Config
    "Settings",
    "configure_logging",
    "settings",
]
