"""
Account key descriptors.

The minimal on-chain account key shapes a keyring can be converted into.
``to_dict`` produces the node's JSON form (``{"keyType": ..., "key": ...}``)
with public keys split into ``x``/``y`` coordinates.
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict, List, Union

import coincurve
from pydantic import BaseModel, Field, field_validator

from ..runtime.codec import add_hex_prefix, hex_to_bytes, is_hex

# Protocol limit on keys in one weighted multisig key
MAX_WEIGHTED_KEYS = 10


def to_uncompressed_public_key(public_key: str) -> str:
    """
    Normalize a public key to 0x + x||y (64 bytes).

    Accepts x||y, 0x04-tagged uncompressed, or 33-byte compressed keys.
    """
    raw = hex_to_bytes(public_key)
    if len(raw) == 64:
        return add_hex_prefix(raw.hex())
    if len(raw) in (33, 65):
        try:
            return add_hex_prefix(coincurve.PublicKey(raw).format(compressed=False)[1:].hex())
        except ValueError as e:
            raise ValueError(f"Invalid public key: {e}") from e
    raise ValueError(f"Invalid public key length: {len(raw)} bytes")


def _xy(public_key: str) -> Dict[str, str]:
    body = to_uncompressed_public_key(public_key)[2:]
    return {"x": "0x" + body[:64], "y": "0x" + body[64:]}


class AccountKey(BaseModel):
    """Base account key."""
    key_type: ClassVar[int] = 0

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


class AccountKeyNil(AccountKey):
    """Placeholder that leaves a role's key unchanged."""

    def to_dict(self) -> Dict[str, Any]:
        return {}


class AccountKeyLegacy(AccountKey):
    """Key derived from the account address."""
    key_type: ClassVar[int] = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"keyType": self.key_type, "key": {}}


class AccountKeyPublic(AccountKey):
    """A single public key."""
    key_type: ClassVar[int] = 2

    public_key: str = Field(description="0x + x||y public key")

    @field_validator("public_key", mode="before")
    @classmethod
    def validate_public_key(cls, v: Any) -> str:
        if not isinstance(v, str) or not is_hex(v):
            raise ValueError("public key must be a hex string")
        return to_uncompressed_public_key(v)

    def to_dict(self) -> Dict[str, Any]:
        return {"keyType": self.key_type, "key": _xy(self.public_key)}


class WeightedPublicKey(BaseModel):
    """A public key with its multisig weight."""
    weight: int = Field(ge=1)
    public_key: str

    model_config = {"frozen": True}

    @field_validator("public_key", mode="before")
    @classmethod
    def validate_public_key(cls, v: Any) -> str:
        if not isinstance(v, str) or not is_hex(v):
            raise ValueError("public key must be a hex string")
        return to_uncompressed_public_key(v)

    def to_dict(self) -> Dict[str, Any]:
        return {"weight": self.weight, "key": _xy(self.public_key)}


class AccountKeyWeightedMultiSig(AccountKey):
    """Public keys with weights and a threshold."""
    key_type: ClassVar[int] = 4

    threshold: int = Field(ge=1)
    weighted_public_keys: List[WeightedPublicKey] = Field(min_length=1, max_length=MAX_WEIGHTED_KEYS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyType": self.key_type,
            "key": {
                "threshold": self.threshold,
                "keys": [weighted.to_dict() for weighted in self.weighted_public_keys],
            },
        }


class AccountKeyRoleBased(AccountKey):
    """One account key per role: transaction, account update, fee payer."""
    key_type: ClassVar[int] = 5

    account_keys: List[Union[AccountKeyWeightedMultiSig, AccountKeyPublic, AccountKeyLegacy, AccountKeyNil]] = Field(
        min_length=1, max_length=3
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyType": self.key_type,
            "key": [account_key.to_dict() for account_key in self.account_keys],
        }


__all__ = [
    "MAX_WEIGHTED_KEYS",
    "to_uncompressed_public_key",
    "AccountKey",
    "AccountKeyNil",
    "AccountKeyLegacy",
    "AccountKeyPublic",
    "WeightedPublicKey",
    "AccountKeyWeightedMultiSig",
    "AccountKeyRoleBased",
]
