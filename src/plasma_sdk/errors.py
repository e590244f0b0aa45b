"""Exception taxonomy for the pricing and routing core."""
from typing import Any, Dict, Optional


class PlasmaSDKError(Exception):
    """Base exception for every error raised by the SDK."""

    def __init__(self, message: str = "", **context: Any):
        """
        Initialize SDK error.

        Args:
            message: Error message
            **context: Structured details rendered after the message
        """
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the error."""
        base_msg = super().__str__() or self.__class__.__name__
        if self.context:
            details = ", ".join(f"{key}={value}" for key, value in self.context.items())
            return f"{base_msg} ({details})"
        return base_msg


class InsufficientReservesError(PlasmaSDKError):
    """
    The pair cannot deliver the requested output: a reserve is empty or the
    desired output meets or exceeds the output reserve.
    """


class InsufficientInputAmountError(PlasmaSDKError):
    """
    The input is too small to produce any output after fees, or a liquidity
    mint would produce no shares.
    """


class CurrencyMismatchError(PlasmaSDKError, ValueError):
    """Arithmetic attempted across two different currencies."""


class UnsupportedProviderError(PlasmaSDKError):
    """No factory configuration exists for a liquidity provider on a chain."""

    def __init__(self, message: str, chain_id: Optional[int] = None, provider: Optional[int] = None):
        self.chain_id = chain_id
        self.provider = provider
        super().__init__(message, chain_id=chain_id, provider=provider)


class ChainMismatchError(PlasmaSDKError, ValueError):
    """Tokens or pairs that must share a chain do not."""


class InvalidPathError(PlasmaSDKError, ValueError):
    """A route is empty, non-contiguous or does not connect its currencies."""


class InvalidAddressError(PlasmaSDKError, ValueError):
    """A token address is malformed or fails checksum validation."""


class SolidityRangeError(PlasmaSDKError, ValueError):
    """A value does not fit the unsigned solidity type it models."""


class PreconditionError(PlasmaSDKError, ValueError):
    """A caller-side invariant was violated."""


def require(condition: bool, message: str, **context: Any) -> None:
    """Raise PreconditionError with message unless condition holds."""
    if not condition:
        raise PreconditionError(message, **context)
