"""
SECP256K1 cryptographic operations for Klaytn.

Provides Ethereum-style recoverable ECDSA signatures backed by coincurve
(libsecp256k1). Signatures are deterministic (RFC 6979) and low-s.
"""

from __future__ import annotations
import os
from typing import Optional, Tuple

import coincurve


class Secp256k1Error(Exception):
    """Base exception for SECP256K1 operations."""
    pass


class Secp256k1Signature:
    """
    Recoverable SECP256K1 signature.

    Holds the (recovery_id, r, s) triple produced over a 32-byte digest.
    """

    def __init__(self, recovery_id: int, r: int, s: int):
        """
        Initialize signature.

        Args:
            recovery_id: Public key recovery id (0 or 1)
            r: Signature r component
            s: Signature s component
        """
        self.recovery_id = recovery_id
        self.r = r
        self.s = s

    @classmethod
    def from_bytes(cls, data: bytes) -> Secp256k1Signature:
        """Parse the 65-byte r||s||recid serialization."""
        if len(data) != 65:
            raise Secp256k1Error(f"Recoverable signature must be 65 bytes, got {len(data)}")
        return cls(data[64], int.from_bytes(data[:32], "big"), int.from_bytes(data[32:64], "big"))

    def to_bytes(self) -> bytes:
        """Serialize as r||s||recid."""
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big") + bytes([self.recovery_id])

    def recover_public_key(self, digest: bytes) -> bytes:
        """
        Recover the signer's uncompressed public key (65 bytes, 0x04 prefix).

        Args:
            digest: 32-byte digest that was signed

        Returns:
            Uncompressed public key bytes
        """
        try:
            public_key = coincurve.PublicKey.from_signature_and_message(self.to_bytes(), digest, hasher=None)
        except ValueError as e:
            raise Secp256k1Error(f"Public key recovery failed: {e}") from e
        return public_key.format(compressed=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secp256k1Signature):
            return NotImplemented
        return (self.recovery_id, self.r, self.s) == (other.recovery_id, other.r, other.s)

    def __str__(self) -> str:
        return f"Secp256k1Signature(r={self.r:064x}, s={self.s:064x}, recid={self.recovery_id})"


class Secp256k1KeyPair:
    """
    SECP256K1 key pair for Klaytn signatures.

    Wraps a 32-byte private scalar; the public key is derived once at
    construction time.
    """

    def __init__(self, private_key_bytes: Optional[bytes] = None):
        """
        Initialize key pair.

        Args:
            private_key_bytes: 32-byte private key (random when omitted)

        Raises:
            Secp256k1Error: If the key is not a valid secp256k1 scalar
        """
        if private_key_bytes is None:
            private_key_bytes = os.urandom(32)
        if len(private_key_bytes) != 32:
            raise Secp256k1Error(f"Private key must be 32 bytes, got {len(private_key_bytes)}")

        try:
            self._private_key = coincurve.PrivateKey(private_key_bytes)
        except ValueError as e:
            raise Secp256k1Error(f"Invalid secp256k1 private key: {e}") from e

        self._private_key_bytes = private_key_bytes
        self.public_key_bytes = self._private_key.public_key.format(compressed=False)

    @classmethod
    def generate(cls) -> Secp256k1KeyPair:
        """Generate a new random key pair."""
        return cls()

    @classmethod
    def from_hex(cls, private_key_hex: str) -> Secp256k1KeyPair:
        """Create key pair from private key hex string."""
        try:
            private_key_bytes = bytes.fromhex(private_key_hex)
        except ValueError as e:
            raise Secp256k1Error(f"Invalid hex string: {e}") from e
        return cls(private_key_bytes)

    def public_key(self, compressed: bool = False) -> bytes:
        """
        Get the public key.

        Args:
            compressed: Return the 33-byte compressed form instead of 65 bytes

        Returns:
            Public key bytes
        """
        if compressed:
            return self._private_key.public_key.format(compressed=True)
        return self.public_key_bytes

    def sign_recoverable(self, digest: bytes) -> Secp256k1Signature:
        """
        Sign a 32-byte digest.

        Args:
            digest: Pre-hashed message

        Returns:
            Recoverable signature
        """
        if len(digest) != 32:
            raise Secp256k1Error(f"Digest must be 32 bytes, got {len(digest)}")
        return Secp256k1Signature.from_bytes(self._private_key.sign_recoverable(digest, hasher=None))

    def to_hex(self) -> str:
        """Get private key as hex string."""
        return self._private_key_bytes.hex()

    def to_bytes(self) -> bytes:
        """Get private key as bytes."""
        return self._private_key_bytes

    def __str__(self) -> str:
        return f"Secp256k1KeyPair(public={self.public_key_bytes.hex()[:16]}...)"


def recover_public_key(digest: bytes, recovery_id: int, r: int, s: int) -> bytes:
    """Recover an uncompressed public key from signature components."""
    return Secp256k1Signature(recovery_id, r, s).recover_public_key(digest)


__all__ = [
    "Secp256k1KeyPair",
    "Secp256k1Signature",
    "Secp256k1Error",
    "recover_public_key",
]
