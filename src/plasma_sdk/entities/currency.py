"""
Currencies: the chain's native coin and ERC20 tokens.

`Currency` is a closed union of `Native` and `Token`. Both expose the same
surface (chain_id, decimals, symbol, name, equals, wrapped, unwrapped); each
chain has exactly one canonical wrapped-native token bridging the two.
"""
from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Union

from ..constants import ChainId, SolidityType
from ..errors import ChainMismatchError, PreconditionError
from ..utils.validation import validate_and_parse_address, validate_solidity_type_instance


@dataclass(frozen=True, eq=False)
class Native:
    """The native currency of a chain, e.g. ETH on mainnet."""
    chain_id: int
    decimals: int = 18
    symbol: Optional[str] = None
    name: Optional[str] = None

    is_native: ClassVar[bool] = True
    is_token: ClassVar[bool] = False

    def __post_init__(self):
        validate_solidity_type_instance(self.decimals, SolidityType.UINT8)

    @classmethod
    def on_chain(cls, chain_id: int) -> "Native":
        """Canonical native currency of chain_id."""
        native = NATIVE.get(chain_id)
        if native is None:
            raise PreconditionError(f"No native currency defined for chain {chain_id}")
        return native

    def equals(self, other: "Currency") -> bool:
        return isinstance(other, Native) and other.chain_id == self.chain_id

    def wrapped(self) -> "Token":
        wrapped_native = WNATIVE.get(self.chain_id)
        if wrapped_native is None:
            raise PreconditionError(f"No wrapped native token for chain {self.chain_id}")
        return wrapped_native

    def unwrapped(self) -> "Native":
        return self

    def __eq__(self, other) -> bool:
        return isinstance(other, Native) and self.equals(other)

    def __hash__(self) -> int:
        return hash(("native", self.chain_id))


@dataclass(frozen=True, eq=False)
class Token:
    """An ERC20 token with a unique checksummed address and some metadata."""
    chain_id: int
    address: str
    decimals: int
    symbol: Optional[str] = None
    name: Optional[str] = None

    is_native: ClassVar[bool] = False
    is_token: ClassVar[bool] = True

    def __post_init__(self):
        validate_solidity_type_instance(self.decimals, SolidityType.UINT8)
        object.__setattr__(self, "address", validate_and_parse_address(self.address))

    def equals(self, other: "Currency") -> bool:
        """Tokens are equal when chain and address match; metadata is ignored."""
        return (
            isinstance(other, Token)
            and other.chain_id == self.chain_id
            and other.address == self.address
        )

    def sorts_before(self, other: "Token") -> bool:
        """
        Whether this token's address sorts before the other's, case-insensitively.

        Raises:
            ChainMismatchError: If the tokens live on different chains
            PreconditionError: If both tokens have the same address
        """
        if self.chain_id != other.chain_id:
            raise ChainMismatchError("CHAIN_IDS", token0=self.address, token1=other.address)
        if self.address == other.address:
            raise PreconditionError("ADDRESSES", address=self.address)
        return self.address.lower() < other.address.lower()

    def wrapped(self) -> "Token":
        return self

    def unwrapped(self) -> "Currency":
        if self.equals(WNATIVE.get(self.chain_id)):
            return NATIVE[self.chain_id]
        return self

    def __eq__(self, other) -> bool:
        return isinstance(other, Token) and self.equals(other)

    def __hash__(self) -> int:
        return hash(("token", self.chain_id, self.address))


Currency = Union[Native, Token]


NATIVE: Dict[int, Native] = {
    ChainId.MAINNET: Native(ChainId.MAINNET, 18, "ETH", "Ethereum"),
    ChainId.ROPSTEN: Native(ChainId.ROPSTEN, 18, "ETH", "Ethereum"),
    ChainId.RINKEBY: Native(ChainId.RINKEBY, 18, "ETH", "Ethereum"),
    ChainId.GOERLI: Native(ChainId.GOERLI, 18, "ETH", "Ethereum"),
    ChainId.KOVAN: Native(ChainId.KOVAN, 18, "ETH", "Ethereum"),
    ChainId.MATIC: Native(ChainId.MATIC, 18, "MATIC", "Matic"),
    ChainId.MUMBAI: Native(ChainId.MUMBAI, 18, "MATIC", "Matic"),
}

WNATIVE: Dict[int, Token] = {
    ChainId.MAINNET: Token(ChainId.MAINNET, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH", "Wrapped Ether"),
    ChainId.ROPSTEN: Token(ChainId.ROPSTEN, "0xc778417E063141139Fce010982780140Aa0cD5Ab", 18, "WETH", "Wrapped Ether"),
    ChainId.RINKEBY: Token(ChainId.RINKEBY, "0xc778417E063141139Fce010982780140Aa0cD5Ab", 18, "WETH", "Wrapped Ether"),
    ChainId.GOERLI: Token(ChainId.GOERLI, "0xB4FBF271143F4FBf7B91A5ded31805e42b2208d6", 18, "WETH", "Wrapped Ether"),
    ChainId.KOVAN: Token(ChainId.KOVAN, "0xd0A1E359811322d97991E03f863a0C30C2cF029C", 18, "WETH", "Wrapped Ether"),
    ChainId.MATIC: Token(ChainId.MATIC, "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270", 18, "WMATIC", "Wrapped Matic"),
    ChainId.MUMBAI: Token(ChainId.MUMBAI, "0x9c3C9283D3e44854697Cd22D3Faa240Cfb032889", 18, "WMATIC", "Wrapped Matic"),
}
