"""
PrivateKey: one secp256k1 private key held by a keyring.
"""

from __future__ import annotations
import os
from typing import Optional, Union

from ..crypto.hashes import keccak256, public_key_to_address
from ..crypto.secp256k1 import Secp256k1Error, Secp256k1KeyPair
from ..runtime.codec import add_hex_prefix, hex_to_bytes, is_valid_private_key, to_hex
from ..runtime.errors import InvalidKeyFormatError
from .helper import parse_chain_id
from .signature_data import SignatureData


class PrivateKey:
    """
    Wraps a 32-byte private key.

    The key is stored as a 0x-prefixed hex string and never changes after
    construction, so instances may be shared between keyring copies.
    """

    def __init__(self, key: str):
        """
        Args:
            key: 64 hex characters, with or without 0x

        Raises:
            InvalidKeyFormatError: If the string is not a valid private key
        """
        if not is_valid_private_key(key):
            raise InvalidKeyFormatError("Invalid private key: expected a 32-byte hex string")
        try:
            self._key_pair = Secp256k1KeyPair(hex_to_bytes(key))
        except Secp256k1Error as e:
            raise InvalidKeyFormatError("Invalid private key: out of range for secp256k1", cause=e) from e
        self._private_key = add_hex_prefix(key).lower()

    @classmethod
    def generate(cls, entropy: Optional[Union[str, bytes]] = None) -> PrivateKey:
        """
        Generate a random private key.

        Args:
            entropy: Optional extra entropy mixed into the OS random bytes
        """
        while True:
            seed = os.urandom(32)
            if entropy is not None:
                extra = entropy.encode("utf-8") if isinstance(entropy, str) else bytes(entropy)
                seed = keccak256(seed + extra)
            try:
                return cls(to_hex(seed))
            except InvalidKeyFormatError:
                continue

    @property
    def private_key(self) -> str:
        return self._private_key

    def get_public_key(self, compressed: bool = False) -> str:
        """
        Get the public key.

        Args:
            compressed: Return the 33-byte compressed form

        Returns:
            0x-prefixed hex; uncompressed keys are x||y without the 0x04 tag
        """
        if compressed:
            return to_hex(self._key_pair.public_key(compressed=True))
        return to_hex(self._key_pair.public_key()[1:])

    def get_derived_address(self) -> str:
        """Address derived from this key's public key."""
        return public_key_to_address(self._key_pair.public_key())

    def sign(self, transaction_hash: str, chain_id: Union[str, int]) -> SignatureData:
        """
        Sign a transaction hash with EIP-155 replay protection.

        Args:
            transaction_hash: 0x-prefixed 32-byte hash
            chain_id: Network chain id (int, decimal or hex string)

        Returns:
            Signature whose v is recovery_id + chain_id * 2 + 35
        """
        signature = self._key_pair.sign_recoverable(hex_to_bytes(transaction_hash))
        v = signature.recovery_id + parse_chain_id(chain_id) * 2 + 35
        return SignatureData.from_components(v, signature.r, signature.s)

    def sign_message(self, message_hash: str) -> SignatureData:
        """
        Sign a message hash without chain id binding.

        Returns:
            Signature whose v is recovery_id + 27
        """
        signature = self._key_pair.sign_recoverable(hex_to_bytes(message_hash))
        return SignatureData.from_components(signature.recovery_id + 27, signature.r, signature.s)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self._private_key == other._private_key

    def __hash__(self) -> int:
        return hash(self._private_key)

    def __repr__(self) -> str:
        return f"PrivateKey(public={self.get_public_key()[:18]}...)"


__all__ = ["PrivateKey"]
