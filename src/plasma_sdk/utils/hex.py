"""Helpers for ABI-encoded calldata."""
import logging
from typing import Union

from ..errors import PreconditionError
from .amounts import parse_bigint_ish

logger = logging.getLogger(__name__)

WORD_LENGTH = 32

# Offsets tried around the quoted amount, closest first
RANGE_TO_CHECK = (0, 1, -1, 2, -2, 3, -3)


def _to_even_hex(value: int) -> str:
    digits = format(value, "x")
    return digits if len(digits) % 2 == 0 else "0" + digits


def format_hex_string(value: str, length: int = WORD_LENGTH) -> str:
    """
    Format a decimal number or a hex string as a `length` byte hex word.

    Shorter values are left padded with zeros, longer ones keep their first
    `length` bytes. The case of hex input is preserved.

    Args:
        value: Decimal integer string or 0x-prefixed hex string
        length: Word length in bytes

    Returns:
        0x-prefixed hex string of exactly 2 * length digits
    """
    if value.startswith("0x"):
        digits = value[2:]
        try:
            int(digits or "0", 16)
        except ValueError:
            raise PreconditionError("Invalid value format", value=value)
        if len(digits) % 2:
            digits = "0" + digits
    else:
        try:
            number = int(value, 10)
        except ValueError:
            raise PreconditionError("Invalid value format", value=value)
        if number < 0:
            raise PreconditionError("Invalid value format", value=value)
        digits = _to_even_hex(number)

    width = length * 2
    if len(digits) < width:
        return "0x" + digits.rjust(width, "0")
    return "0x" + digits[:width]


def get_exact_input_amount(input_amount: Union[int, str], data: str) -> str:
    """
    Find the amount actually encoded in transaction calldata.

    Quotes from aggregators can be off by a few wei from the amount the
    calldata spends. Each candidate near input_amount is searched for as a
    hex substring of data; the first hit wins.

    Args:
        input_amount: The quoted input amount
        data: Hex encoded calldata

    Returns:
        The matching amount as a decimal string, or input_amount unchanged
    """
    base = parse_bigint_ish(input_amount)
    haystack = data.lower()
    for offset in RANGE_TO_CHECK:
        candidate = base + offset
        if candidate < 0:
            continue
        if _to_even_hex(candidate) in haystack:
            if offset:
                logger.debug(f"Calldata amount differs from quote by {offset}: {candidate}")
            return str(candidate)
    return str(input_amount)
