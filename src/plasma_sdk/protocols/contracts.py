"""Factory configuration of Uniswap V2 compatible protocols by chain."""
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from web3 import Web3

from ..constants import LIQUIDITY_PROVIDER_NAME, NETWORK_LABEL, ChainId, LiquidityProvider
from ..errors import UnsupportedProviderError
from ..utils.validation import has_valid_checksum

logger = logging.getLogger(__name__)

UNISWAP_V2_INIT_CODE_HASH = "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"
SUSHISWAP_INIT_CODE_HASH = "0xe18a34eb0e04b04f7a0ac29a6e80748dca96319b42c54d679cb821dca90c6303"


class LpConfiguration(BaseModel):
    """Deployment of a liquidity provider's factory and router on one chain."""

    factory: str = Field(..., description="Pair factory address")
    router: str = Field(..., description="Router address")
    init_code_hash: str = Field(..., description="keccak256 of the pair creation code")
    created_timestamp: int = Field(..., description="Unix timestamp of factory deployment", ge=0)
    created_block_number: int = Field(..., description="Block of factory deployment", ge=0)
    graph_url: Optional[str] = Field(None, description="Subgraph endpoint")

    model_config = {"frozen": True}

    @field_validator("factory", "router")
    @classmethod
    def checksum_address(cls, v):
        """Normalize addresses to their checksummed form."""
        if not Web3.is_address(v):
            raise ValueError(f"{v} is not a valid address")
        if not has_valid_checksum(v):
            raise ValueError(f"{v} has an invalid checksum")
        return Web3.to_checksum_address(v)

    @field_validator("init_code_hash")
    @classmethod
    def bytes32_hex(cls, v):
        """Ensure the init code hash is a 0x-prefixed 32 byte hex string."""
        if not (v.startswith("0x") and len(v) == 66):
            raise ValueError(f"{v} is not a 32 byte hex string")
        int(v, 16)
        return v.lower()


LP_CONFIGURATIONS: Dict[ChainId, Dict[LiquidityProvider, LpConfiguration]] = {
    ChainId.MAINNET: {
        LiquidityProvider.UNISWAP: LpConfiguration(
            factory="0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f",
            router="0x7a250d5630b4cf539739df2c5dacb4c659f2488d",
            init_code_hash=UNISWAP_V2_INIT_CODE_HASH,
            created_timestamp=1588610042,
            created_block_number=10000835,
            graph_url="https://api.thegraph.com/subgraphs/name/uniswap/uniswap-v2",
        ),
        LiquidityProvider.PLASMA: LpConfiguration(
            factory="0xd87ad19db2c4ccbf897106de034d52e3dd90ea60",
            router="0x5ec243f1f7ecfc137e98365c30c9a28691d86132",
            init_code_hash="0x611ee9501fb19c9df82695e66f6c58d69d86907b531dfbed652231515ae84081",
            created_timestamp=1611490369,
            created_block_number=11718234,
            graph_url="https://api.thegraph.com/subgraphs/name/itsib/plasmaswap-v2",
        ),
        LiquidityProvider.SUSHISWAP: LpConfiguration(
            factory="0xc0aee478e3658e2610c5f7a4a2e1777ce9e4f2ac",
            router="0xd9e1ce17f2641f24ae83637ab66a2cca9c378b9f",
            init_code_hash=SUSHISWAP_INIT_CODE_HASH,
            created_timestamp=1599214239,
            created_block_number=10794229,
            graph_url="https://api.thegraph.com/subgraphs/name/sushiswap/exchange",
        ),
    },
    ChainId.ROPSTEN: {
        LiquidityProvider.UNISWAP: LpConfiguration(
            factory="0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f",
            router="0x7a250d5630b4cf539739df2c5dacb4c659f2488d",
            init_code_hash=UNISWAP_V2_INIT_CODE_HASH,
            created_timestamp=1588609929,
            created_block_number=7842777,
        ),
    },
    ChainId.RINKEBY: {
        LiquidityProvider.UNISWAP: LpConfiguration(
            factory="0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f",
            router="0x7a250d5630b4cf539739df2c5dacb4c659f2488d",
            init_code_hash=UNISWAP_V2_INIT_CODE_HASH,
            created_timestamp=1588609623,
            created_block_number=6430279,
        ),
    },
    ChainId.GOERLI: {
        LiquidityProvider.UNISWAP: LpConfiguration(
            factory="0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f",
            router="0x7a250d5630b4cf539739df2c5dacb4c659f2488d",
            init_code_hash=UNISWAP_V2_INIT_CODE_HASH,
            created_timestamp=1616151422,
            created_block_number=4467712,
        ),
    },
    ChainId.KOVAN: {
        LiquidityProvider.UNISWAP: LpConfiguration(
            factory="0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f",
            router="0x7a250d5630b4cf539739df2c5dacb4c659f2488d",
            init_code_hash=UNISWAP_V2_INIT_CODE_HASH,
            created_timestamp=1588609788,
            created_block_number=18344859,
            graph_url="https://api.thegraph.com/subgraphs/name/maurodelazeri/uniswapv2-kovan",
        ),
        LiquidityProvider.PLASMA: LpConfiguration(
            factory="0x7a6521ba7ba45c908be726d719acd547d4a8e246",
            router="0x905df0e2cd022bc1a67bf15df485b18ea631d304",
            init_code_hash="0xe60eb03e61b5fbeba179f6defb71bb00c5db9dab3b10d39c3985d66081de6d3d",
            created_timestamp=1606861200,
            created_block_number=22379351,
            graph_url="https://api.thegraph.com/subgraphs/name/itsib/plasmaswap",
        ),
        LiquidityProvider.SUSHISWAP: LpConfiguration(
            factory="0x8d4fd620cb7ed677870b8b62f22c166cc76fb519",
            router="0x4a0b3a56ecb360924639f57cd41d0358aed9acdd",
            init_code_hash="0xa0f8210a4091231cb34588d36a21ac73a6681adda0d825bf06c963da5ff4af47",
            created_timestamp=1612524980,
            created_block_number=23322618,
        ),
    },
    ChainId.MATIC: {
        LiquidityProvider.PLASMA: LpConfiguration(
            factory="0x745c475cc101ca5580eff6f723976480881bc008",
            router="0x5d5badef6f69cbafdf443d6226dc00b24626367e",
            init_code_hash="0xb19b1e3807140bf48c498cb50370e129d9bd9e5e333bf0e67d9ce7507e634b72",
            created_timestamp=1623075489,
            created_block_number=15441546,
            graph_url="https://api.thegraph.com/subgraphs/name/itsib/plasmaswap-poligon",
        ),
        LiquidityProvider.SUSHISWAP: LpConfiguration(
            factory="0xc35dadb65012ec5796536bd9864ed8773abc74c4",
            router="0x1b02da8cb0d097eb8d57a175b88c7d8b47997506",
            init_code_hash=SUSHISWAP_INIT_CODE_HASH,
            created_timestamp=1614311449,
            created_block_number=11333218,
            graph_url="https://api.thegraph.com/subgraphs/name/sushiswap/matic-exchange",
        ),
    },
}


def get_lp_configuration(chain_id: Optional[int], provider: Optional[int]) -> Optional[LpConfiguration]:
    """Get the factory configuration of provider on chain_id, or None."""
    if chain_id is None or provider is None:
        return None
    return LP_CONFIGURATIONS.get(chain_id, {}).get(provider)


def require_lp_configuration(chain_id: int, provider: int) -> LpConfiguration:
    """Like get_lp_configuration but raises UnsupportedProviderError on a miss."""
    conf = get_lp_configuration(chain_id, provider)
    if conf is None:
        provider_name = LIQUIDITY_PROVIDER_NAME.get(provider, provider)
        network = NETWORK_LABEL.get(chain_id, chain_id)
        logger.warning(f"No LP configuration for {provider_name} on {network}")
        raise UnsupportedProviderError(
            f"Unsupported liquidity provider {provider_name} in network {network}",
            chain_id=chain_id,
            provider=provider,
        )
    return conf


def get_supported_providers(chain_id: int) -> List[LiquidityProvider]:
    """Get the liquidity providers deployed on chain_id."""
    return list(LP_CONFIGURATIONS.get(chain_id, {}).keys())


def is_supported_chain(chain_id: int) -> bool:
    """Check if any liquidity provider is configured on chain_id."""
    return chain_id in LP_CONFIGURATIONS
