"""Conversions into raw integer amounts."""
from ..constants import BigintIsh
from ..errors import SolidityRangeError


def parse_bigint_ish(value: BigintIsh) -> int:
    """
    Parse an int, a decimal string or a 0x-prefixed hex string into an int.

    Floats are rejected: every amount in the core is an exact integer.
    """
    if isinstance(value, bool):
        raise SolidityRangeError(f"{value!r} is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith(("0x", "-0x")):
                return int(text, 16)
            return int(text, 10)
        except ValueError:
            raise SolidityRangeError(f"{value!r} is not an integer") from None
    raise SolidityRangeError(f"{value!r} is not an integer")