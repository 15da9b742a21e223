"""
Cryptographic primitives for Klaytn.

Provides secp256k1 recoverable signatures and Keccak-256 based hashing.
"""

from .secp256k1 import Secp256k1KeyPair, Secp256k1Signature, Secp256k1Error, recover_public_key
from .hashes import keccak256, hash_message, public_key_to_address

__all__ = [
    "Secp256k1KeyPair",
    "Secp256k1Signature",
    "Secp256k1Error",
    "recover_public_key",
    "keccak256",
    "hash_message",
    "public_key_to_address",
]
