"""Chain ids, liquidity providers and numeric constants shared by the SDK."""
from decimal import ROUND_DOWN, ROUND_HALF_UP, ROUND_UP
from enum import Enum, IntEnum
from typing import Dict, Union


BigintIsh = Union[int, str]


class ChainId(IntEnum):
    """Supported EVM networks."""
    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    KOVAN = 42
    MATIC = 137
    MUMBAI = 80001


class LiquidityProvider(IntEnum):
    """Uniswap V2 compatible protocols with a known factory."""
    PLASMA = 0
    UNISWAP = 1
    SUSHISWAP = 2


class TradeType(str, Enum):
    """Which side of a trade is fixed."""
    EXACT_INPUT = "exact_input"     # Input amount is fixed, output is quoted
    EXACT_OUTPUT = "exact_output"   # Output amount is fixed, input is quoted


class Rounding(str, Enum):
    """Rounding modes for formatted output, valued as decimal module modes."""
    ROUND_DOWN = ROUND_DOWN          # Truncate toward zero
    ROUND_HALF_UP = ROUND_HALF_UP    # Half away from zero
    ROUND_UP = ROUND_UP              # Away from zero on any remainder


class SolidityType(str, Enum):
    """Unsigned solidity types whose ranges are enforced on amounts."""
    UINT8 = "uint8"
    UINT256 = "uint256"


SOLIDITY_TYPE_MAXIMA: Dict[SolidityType, int] = {
    SolidityType.UINT8: 0xFF,
    SolidityType.UINT256: 2**256 - 1,
}

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Liquidity permanently locked by the first mint of every pair
MINIMUM_LIQUIDITY = 1000

# Uniswap V2 swap fee: 0.3% taken from the input amount
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

NETWORK_LABEL: Dict[ChainId, str] = {
    ChainId.MAINNET: "Ethereum",
    ChainId.ROPSTEN: "Ropsten",
    ChainId.RINKEBY: "Rinkeby",
    ChainId.GOERLI: "Görli",
    ChainId.KOVAN: "Kovan",
    ChainId.MATIC: "Polygon",
    ChainId.MUMBAI: "Mumbai",
}

NETWORK_NAME: Dict[ChainId, str] = {
    ChainId.MAINNET: "Ethereum Mainnet",
    ChainId.ROPSTEN: "Ropsten Test Network",
    ChainId.RINKEBY: "Rinkeby Test Network",
    ChainId.GOERLI: "Goerli Test Network",
    ChainId.KOVAN: "Kovan Test Network",
    ChainId.MATIC: "Polygon Matic",
    ChainId.MUMBAI: "Polygon Mumbai Testnet",
}

# LP token names feed into permit signatures, never change them
LIQUIDITY_TOKEN_NAME: Dict[LiquidityProvider, str] = {
    LiquidityProvider.UNISWAP: "Uniswap V2",
    LiquidityProvider.PLASMA: "Plasmaswap",
    LiquidityProvider.SUSHISWAP: "SushiSwap LP Token",
}

LIQUIDITY_TOKEN_SYMBOL: Dict[LiquidityProvider, str] = {
    LiquidityProvider.UNISWAP: "UNI-V2",
    LiquidityProvider.PLASMA: "P-LP",
    LiquidityProvider.SUSHISWAP: "SLP",
}

LIQUIDITY_PROVIDER_SYMBOL: Dict[LiquidityProvider, str] = {
    LiquidityProvider.PLASMA: "PLASMA",
    LiquidityProvider.UNISWAP: "UNISWAP",
    LiquidityProvider.SUSHISWAP: "SUSHISWAP",
}

LIQUIDITY_PROVIDER_NAME: Dict[LiquidityProvider, str] = {
    LiquidityProvider.PLASMA: "PlasmaSwap",
    LiquidityProvider.UNISWAP: "Uniswap",
    LiquidityProvider.SUSHISWAP: "SushiSwap",
}
