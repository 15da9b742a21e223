"""
Hex encoding helpers for Klaytn values.

Klaytn exchanges keys, hashes and addresses as 0x-prefixed hex strings.
These helpers normalize, validate and convert between hex strings and bytes.
"""

from __future__ import annotations
import re
from typing import Union

_HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]*$")
_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")
_HASH_STRICT_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def is_hex_prefixed(value: str) -> bool:
    """Check whether a string starts with 0x (case-insensitive)."""
    return isinstance(value, str) and value[:2].lower() == "0x"


def strip_hex_prefix(value: str) -> str:
    """Remove a leading 0x if present."""
    return value[2:] if is_hex_prefixed(value) else value


def add_hex_prefix(value: str) -> str:
    """Add a leading 0x if missing."""
    return value if is_hex_prefixed(value) else "0x" + value


def is_hex(value: str) -> bool:
    """Check whether a string is hex, with or without 0x."""
    return isinstance(value, str) and bool(_HEX_RE.match(value))


def is_valid_address(value: str) -> bool:
    """Check for a 20-byte hex address (0x optional)."""
    return isinstance(value, str) and bool(_ADDRESS_RE.match(value))


def is_valid_hash_strict(value: str) -> bool:
    """Check for a 0x-prefixed 32-byte hex digest."""
    return isinstance(value, str) and bool(_HASH_STRICT_RE.match(value))


def is_valid_private_key(value: str) -> bool:
    """Check for a 32-byte hex private key string (0x optional)."""
    return isinstance(value, str) and bool(_PRIVATE_KEY_RE.match(value))


def hex_to_bytes(value: Union[str, bytes]) -> bytes:
    """
    Convert a hex string (0x optional) to bytes.

    Args:
        value: Hex string or bytes (returned as-is)

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the string is not valid hex
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    body = strip_hex_prefix(value)
    if len(body) % 2:
        body = "0" + body
    return bytes.fromhex(body)


def to_hex(data: bytes, prefix: bool = True) -> str:
    """Encode bytes as lower-case hex, 0x-prefixed by default."""
    return ("0x" if prefix else "") + data.hex()


def int_to_hex(value: int) -> str:
    """Encode a non-negative integer as a minimal 0x hex quantity."""
    return hex(value)


__all__ = [
    "is_hex_prefixed",
    "strip_hex_prefix",
    "add_hex_prefix",
    "is_hex",
    "is_valid_address",
    "is_valid_hash_strict",
    "is_valid_private_key",
    "hex_to_bytes",
    "to_hex",
    "int_to_hex",
]
