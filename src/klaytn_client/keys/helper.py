"""
Shared keyring utilities.

Holds the KeyRole table, signing-input validation and the keystore
encryption routines used by every keyring variant.

Keystore entries follow the Ethereum keystore v3 ``crypto`` layout:

    {
        "ciphertext": "...",
        "cipherparams": {"iv": "..."},
        "cipher": "aes-128-ctr",
        "kdf": "scrypt" | "pbkdf2",
        "kdfparams": {...},
        "mac": "..."
    }

A keystore v4 document holds a list of such entries (one per key, or one list
per role) under ``keyring``.
"""

from __future__ import annotations
import hmac
import logging
import os
import uuid
from enum import IntEnum
from typing import Any, Dict, List, Sequence, Union

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from ..crypto.hashes import keccak256
from ..runtime.codec import (
    add_hex_prefix,
    hex_to_bytes,
    is_hex,
    is_hex_prefixed,
    is_valid_hash_strict,
    strip_hex_prefix,
)
from ..runtime.errors import (
    IndexOutOfRangeError,
    InvalidChainIdError,
    InvalidHashFormatError,
    InvalidRoleError,
    KeystoreDecryptionError,
    KeystoreError,
    RoleRequiredError,
)
from .options import SUPPORTED_CIPHERS, KeystoreOptions

logger = logging.getLogger(__name__)


class KeyRole(IntEnum):
    """
    Key roles of a Klaytn account.

    LAST is a sentinel marking the upper bound; valid roles are [0, LAST).
    """
    TRANSACTION_KEY = 0
    ACCOUNT_UPDATE_KEY = 1
    FEE_PAYER_KEY = 2
    LAST = 3

    @property
    def role_name(self) -> str:
        """camelCase role name, e.g. roleTransactionKey."""
        return "role" + "".join(part.capitalize() for part in self.name.split("_"))


ROLE_COUNT = int(KeyRole.LAST)


# =============================================================================
# Validation
# =============================================================================

def parse_chain_id(chain_id: Union[str, int]) -> int:
    """
    Convert a chain id to an integer.

    Args:
        chain_id: Non-negative int, decimal string, or 0x hex string

    Raises:
        InvalidChainIdError: If the value is not a non-negative integer
    """
    if isinstance(chain_id, bool):
        raise InvalidChainIdError(f"Invalid chain id: {chain_id!r}")
    if isinstance(chain_id, int):
        if chain_id < 0:
            raise InvalidChainIdError(f"Invalid chain id: {chain_id}. Chain id cannot be negative.")
        return chain_id
    if isinstance(chain_id, str):
        value = chain_id.strip()
        try:
            if value[:2].lower() == "0x":
                body = value[2:]
                if body and not is_hex_prefixed(body) and is_hex(body):
                    return int(body, 16)
            elif value.isascii() and value.isdigit():
                return int(value, 10)
        except ValueError:
            pass
        raise InvalidChainIdError(f"Invalid chain id: {chain_id!r}")
    if chain_id is None:
        raise InvalidChainIdError("chainId should be defined to sign.")
    raise InvalidChainIdError(f"Invalid type of chain id: {type(chain_id).__name__}")


def validate_for_signing(hash: str, chain_id: Union[str, int]) -> None:
    """
    Validate transaction signing input.

    Raises:
        InvalidHashFormatError: If hash is not a 0x-prefixed 32-byte hex digest
        InvalidChainIdError: If chain_id is not a non-negative integer
    """
    if not is_valid_hash_strict(hash):
        raise InvalidHashFormatError(f"Invalid transaction hash: {hash!r}")
    parse_chain_id(chain_id)


def validate_index_with_keys(index: int, length: int) -> None:
    """
    Validate a key index against the number of keys.

    Raises:
        IndexOutOfRangeError: If index is not an int in [0, length)
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexOutOfRangeError(f"Invalid type of index({index!r}): index should be number type.")
    if index < 0:
        raise IndexOutOfRangeError(f"Invalid index({index}): index cannot be negative.")
    if index >= length:
        raise IndexOutOfRangeError(
            f"Invalid index({index}): index must be less than the length of keys({length}).",
            details={"index": index, "length": length},
        )


def validate_role(role: Any) -> KeyRole:
    """
    Validate a role value.

    Raises:
        RoleRequiredError: If role is None
        InvalidRoleError: If role is not an int in [0, KeyRole.LAST)
    """
    if role is None:
        raise RoleRequiredError("role should be defined.")
    if isinstance(role, bool) or not isinstance(role, int) or role < 0 or role >= KeyRole.LAST:
        raise InvalidRoleError(f"Invalid role number: {role!r}")
    return KeyRole(role)


# =============================================================================
# Keystore encryption
# =============================================================================

def _password_bytes(password: Union[str, bytes]) -> bytes:
    if isinstance(password, (bytes, bytearray)):
        return bytes(password)
    if isinstance(password, str):
        return password.encode("utf-8")
    raise KeystoreError(f"Password must be str or bytes, got {type(password).__name__}")


def _derive_key(password: bytes, kdf: str, kdfparams: Dict[str, Any]) -> bytes:
    salt = hex_to_bytes(kdfparams["salt"])
    dklen = int(kdfparams["dklen"])
    if kdf == "scrypt":
        derive = Scrypt(
            salt=salt,
            length=dklen,
            n=int(kdfparams["n"]),
            r=int(kdfparams["r"]),
            p=int(kdfparams["p"]),
            backend=default_backend()
        )
    elif kdf == "pbkdf2":
        if kdfparams.get("prf", "hmac-sha256") != "hmac-sha256":
            raise KeystoreError(f"Unsupported pbkdf2 prf: {kdfparams.get('prf')}")
        derive = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=dklen,
            salt=salt,
            iterations=int(kdfparams["c"]),
            backend=default_backend()
        )
    else:
        raise KeystoreError(f"Unsupported kdf: {kdf}")
    return derive.derive(password)


def _aes_128_ctr(key: bytes, iv: bytes, data: bytes) -> bytes:
    # CTR mode: encryption and decryption are the same transform
    cipher = Cipher(algorithms.AES(key), modes.CTR(iv), backend=default_backend())
    transform = cipher.encryptor()
    return transform.update(data) + transform.finalize()


def _key_hex(key: Any) -> str:
    if isinstance(key, str):
        return key
    if hasattr(key, "private_key"):
        return key.private_key
    raise KeystoreError(f"Cannot encrypt key of type {type(key).__name__}")


def encrypt_key(keys: Union[Any, Sequence[Any]], password: Union[str, bytes],
                options: Union[KeystoreOptions, Dict[str, Any], None] = None) -> List[Dict[str, Any]]:
    """
    Encrypt private keys under one password.

    Every key is encrypted independently; when salt/iv are not fixed by the
    options, each entry gets fresh random ones.

    Args:
        keys: A PrivateKey / hex string, or a sequence of them
        password: Keystore password
        options: Keystore options (see KeystoreOptions)

    Returns:
        List of encrypted entries, in key order
    """
    opts = KeystoreOptions.parse(options)
    password_bytes = _password_bytes(password)
    if isinstance(keys, (list, tuple)):
        key_list = list(keys)
    else:
        key_list = [keys]

    entries = []
    for key in key_list:
        salt = opts.salt if opts.salt is not None else os.urandom(32)
        iv = opts.iv if opts.iv is not None else os.urandom(16)

        if opts.kdf == "pbkdf2":
            kdfparams = {"dklen": opts.dklen, "salt": salt.hex(), "c": opts.c, "prf": "hmac-sha256"}
        else:
            kdfparams = {"dklen": opts.dklen, "salt": salt.hex(), "n": opts.n, "r": opts.r, "p": opts.p}

        derived_key = _derive_key(password_bytes, opts.kdf, kdfparams)
        ciphertext = _aes_128_ctr(derived_key[:16], iv, hex_to_bytes(_key_hex(key)))
        mac = keccak256(derived_key[16:32] + ciphertext)

        entries.append({
            "ciphertext": ciphertext.hex(),
            "cipherparams": {"iv": iv.hex()},
            "cipher": opts.cipher,
            "kdf": opts.kdf,
            "kdfparams": kdfparams,
            "mac": mac.hex(),
        })

    logger.debug(f"Encrypted {len(entries)} key(s) with {opts.kdf}")
    return entries


def decrypt_key(entry: Dict[str, Any], password: Union[str, bytes]) -> str:
    """
    Decrypt one keystore entry.

    Args:
        entry: Encrypted entry (keystore v3 ``crypto`` object)
        password: Keystore password

    Returns:
        0x-prefixed private key hex

    Raises:
        KeystoreDecryptionError: If the MAC does not match (wrong password)
        KeystoreError: If the entry is malformed or uses unsupported parameters
    """
    try:
        cipher = entry["cipher"].lower()
        kdf = entry["kdf"].lower()
        kdfparams = entry["kdfparams"]
        iv = hex_to_bytes(entry["cipherparams"]["iv"])
        ciphertext = hex_to_bytes(entry["ciphertext"])
        mac = hex_to_bytes(entry["mac"])
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise KeystoreError(f"Malformed keystore entry: {e}", cause=e) from e

    if cipher not in SUPPORTED_CIPHERS:
        raise KeystoreError(f"Unsupported cipher: {cipher}")

    try:
        derived_key = _derive_key(_password_bytes(password), kdf, kdfparams)
    except (KeyError, TypeError, ValueError) as e:
        raise KeystoreError(f"Invalid kdf parameters: {e}", cause=e) from e

    if not hmac.compare_digest(keccak256(derived_key[16:32] + ciphertext), mac):
        raise KeystoreDecryptionError()

    return add_hex_prefix(_aes_128_ctr(derived_key[:16], iv, ciphertext).hex())


def format_encrypted(version: int, address: str, key_ring: Union[List[Any], Dict[str, Any]],
                     options: Union[KeystoreOptions, Dict[str, Any], None] = None) -> Dict[str, Any]:
    """
    Build the keystore envelope.

    Args:
        version: 3 (single ``crypto`` entry) or 4 (``keyring`` list)
        address: Keyring address
        key_ring: Encrypted entries (a dict for v3)
        options: Keystore options; ``uuid`` fixes the keystore id

    Returns:
        Keystore object
    """
    opts = KeystoreOptions.parse(options)
    keystore: Dict[str, Any] = {
        "version": version,
        "id": opts.uuid or str(uuid.uuid4()),
        "address": add_hex_prefix(strip_hex_prefix(address)).lower(),
    }
    if version == 3:
        keystore["crypto"] = key_ring
    elif version == 4:
        keystore["keyring"] = key_ring
    else:
        raise KeystoreError(f"Unsupported keystore version: {version}")
    return keystore


__all__ = [
    "KeyRole",
    "ROLE_COUNT",
    "parse_chain_id",
    "validate_for_signing",
    "validate_index_with_keys",
    "validate_role",
    "encrypt_key",
    "decrypt_key",
    "format_encrypted",
]
