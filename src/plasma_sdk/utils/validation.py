"""Range and address validation helpers."""
from web3 import Web3

from ..constants import SOLIDITY_TYPE_MAXIMA, SolidityType
from ..errors import InvalidAddressError, SolidityRangeError


def validate_solidity_type_instance(value: int, solidity_type: SolidityType) -> None:
    """Raise SolidityRangeError unless 0 <= value <= max of solidity_type."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise SolidityRangeError(f"{value!r} is not an integer", type=solidity_type.value)
    if value < 0:
        raise SolidityRangeError(f"{value} is not a {solidity_type.value}", type=solidity_type.value)
    if value > SOLIDITY_TYPE_MAXIMA[solidity_type]:
        raise SolidityRangeError(f"{value} is not a {solidity_type.value}", type=solidity_type.value)


def has_valid_checksum(address: str) -> bool:
    """True unless the address is mixed case and fails its EIP-55 checksum."""
    body = address[2:] if address[:2] in ("0x", "0X") else address
    if body == body.lower() or body == body.upper():
        return True
    return Web3.is_checksum_address(address)


def validate_and_parse_address(address: str) -> str:
    """
    Validate an address and return its EIP-55 checksummed form.

    All-lowercase and all-uppercase addresses are accepted; mixed case must
    carry a valid checksum.
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidAddressError(f"{address!r} is not a valid address")
    if not has_valid_checksum(address):
        raise InvalidAddressError(f"{address!r} has an invalid checksum")
    return Web3.to_checksum_address(address)
