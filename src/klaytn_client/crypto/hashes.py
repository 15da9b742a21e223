"""
Hash functions used by Klaytn keyrings.

Klaytn inherits Ethereum's Keccak-256 (not FIPS SHA3-256) for addresses,
keystore MACs and signed-message hashing.
"""

from __future__ import annotations
from typing import Union

from Crypto.Hash import keccak

from ..runtime.codec import hex_to_bytes, is_hex, is_hex_prefixed, to_hex

KLAYTN_MESSAGE_PREFIX = b"\x19Klaytn Signed Message:\n"


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash.

    Args:
        data: Input data to hash

    Returns:
        32-byte Keccak-256 digest
    """
    return keccak.new(digest_bits=256, data=data).digest()


def message_to_bytes(message: Union[str, bytes]) -> bytes:
    """
    Convert a message to the bytes that are signed.

    0x-prefixed hex strings are decoded; any other string is UTF-8 encoded.
    """
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    if is_hex_prefixed(message) and is_hex(message):
        return hex_to_bytes(message)
    return message.encode("utf-8")


def hash_message(message: Union[str, bytes]) -> str:
    """
    Hash a message with the Klaytn signed-message prefix.

    keccak256("\\x19Klaytn Signed Message:\\n" + len(message) + message)

    Args:
        message: Message as text, 0x-hex or bytes

    Returns:
        0x-prefixed hex digest
    """
    data = message_to_bytes(message)
    preamble = KLAYTN_MESSAGE_PREFIX + str(len(data)).encode("ascii")
    return to_hex(keccak256(preamble + data))


def public_key_to_address(public_key_bytes: bytes) -> str:
    """
    Derive an account address from an uncompressed public key.

    Args:
        public_key_bytes: 64-byte x||y, or 65 bytes starting with 0x04

    Returns:
        0x-prefixed lower-case address (last 20 bytes of the Keccak-256 hash)
    """
    if len(public_key_bytes) == 65 and public_key_bytes[0] == 0x04:
        public_key_bytes = public_key_bytes[1:]
    elif len(public_key_bytes) != 64:
        raise ValueError(f"Invalid uncompressed public key length: {len(public_key_bytes)}")
    return to_hex(keccak256(public_key_bytes)[-20:])


__all__ = [
    "KLAYTN_MESSAGE_PREFIX",
    "keccak256",
    "message_to_bytes",
    "hash_message",
    "public_key_to_address",
]
