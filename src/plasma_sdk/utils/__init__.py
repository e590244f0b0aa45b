"""Validation and parsing helpers."""
from .amounts import parse_bigint_ish
from .hex import format_hex_string, get_exact_input_amount
from .validation import has_valid_checksum, validate_and_parse_address, validate_solidity_type_instance

__all__ = [
    "parse_bigint_ish",
    "format_hex_string",
    "get_exact_input_amount",
    "has_valid_checksum",
    "validate_and_parse_address",
    "validate_solidity_type_instance",
]
