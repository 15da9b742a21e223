"""
Keystore encryption options.

Typed configuration for keystore encryption, accepting the same keys as the
keystore JSON (``salt``, ``iv``, ``kdf``, ``dklen``, ``c``, ``n``, ``r``,
``p``, ``cipher``, ``uuid``). Unset salt/iv/uuid are filled from a CSPRNG at
encryption time.
"""

from __future__ import annotations
import uuid as uuid_lib
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..runtime.codec import hex_to_bytes
from ..runtime.errors import KeystoreError

SUPPORTED_KDFS = ("scrypt", "pbkdf2")
SUPPORTED_CIPHERS = ("aes-128-ctr",)


class KeystoreOptions(BaseModel):
    """
    Key derivation and cipher parameters for keystore encryption.

    Defaults match the Klaytn keystore conventions: scrypt with
    n=4096, r=8, p=1, or pbkdf2 with c=262144, and aes-128-ctr.
    """
    salt: Optional[bytes] = Field(default=None, description="KDF salt (random 32 bytes when unset)")
    iv: Optional[bytes] = Field(default=None, description="Cipher IV (random 16 bytes when unset)")
    kdf: str = Field(default="scrypt", description="Key derivation function: scrypt or pbkdf2")
    dklen: int = Field(default=32, ge=32, description="Derived key length in bytes")
    c: int = Field(default=262144, ge=1, description="pbkdf2 iteration count")
    n: int = Field(default=4096, ge=2, description="scrypt CPU/memory cost (power of two)")
    r: int = Field(default=8, ge=1, description="scrypt block size")
    p: int = Field(default=1, ge=1, description="scrypt parallelization")
    cipher: str = Field(default="aes-128-ctr", description="Symmetric cipher")
    uuid: Optional[str] = Field(default=None, description="Keystore id (random uuid4 when unset)")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("salt", "iv", mode="before")
    @classmethod
    def validate_hex_bytes(cls, v: Any) -> Optional[bytes]:
        """Accept bytes or a hex string."""
        if v is None:
            return None
        if isinstance(v, (bytes, bytearray)):
            return bytes(v)
        if isinstance(v, str):
            return hex_to_bytes(v)
        raise ValueError(f"must be bytes or hex string, got {type(v).__name__}")

    @field_validator("iv")
    @classmethod
    def validate_iv_length(cls, v: Optional[bytes]) -> Optional[bytes]:
        if v is not None and len(v) != 16:
            raise ValueError(f"iv must be 16 bytes, got {len(v)}")
        return v

    @field_validator("kdf", "cipher", mode="before")
    @classmethod
    def lower_case(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("kdf")
    @classmethod
    def validate_kdf(cls, v: str) -> str:
        if v not in SUPPORTED_KDFS:
            raise ValueError(f"Unsupported kdf: {v}")
        return v

    @field_validator("cipher")
    @classmethod
    def validate_cipher(cls, v: str) -> str:
        if v not in SUPPORTED_CIPHERS:
            raise ValueError(f"Unsupported cipher: {v}")
        return v

    @field_validator("uuid", mode="before")
    @classmethod
    def validate_uuid(cls, v: Any) -> Optional[str]:
        """Accept a UUID, its string form, or 16 raw bytes."""
        if v is None:
            return None
        if isinstance(v, uuid_lib.UUID):
            return str(v)
        if isinstance(v, (bytes, bytearray)):
            return str(uuid_lib.UUID(bytes=bytes(v)))
        if isinstance(v, str):
            return str(uuid_lib.UUID(v))
        raise ValueError(f"uuid must be a UUID, string or 16 bytes, got {type(v).__name__}")

    @model_validator(mode="after")
    def validate_scrypt_cost(self) -> KeystoreOptions:
        if self.kdf == "scrypt" and self.n & (self.n - 1):
            raise ValueError(f"scrypt n must be a power of two, got {self.n}")
        return self

    @classmethod
    def parse(cls, options: Union[KeystoreOptions, Dict[str, Any], None]) -> KeystoreOptions:
        """
        Coerce user supplied options.

        Args:
            options: None, a dict, or a KeystoreOptions instance

        Raises:
            KeystoreError: If the options are invalid
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, dict):
            raise KeystoreError(f"Keystore options must be a dict, got {type(options).__name__}")
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise KeystoreError(f"Invalid keystore options: {e.errors()[0]['msg']}", cause=e) from e


__all__ = ["KeystoreOptions", "SUPPORTED_KDFS", "SUPPORTED_CIPHERS"]
