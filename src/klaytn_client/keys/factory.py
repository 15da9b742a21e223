"""
Keyring construction: generation, creation from key material, and keystore
decryption.
"""

from __future__ import annotations
import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from ..runtime.codec import add_hex_prefix
from ..runtime.errors import InvalidKeyFormatError, InvalidKeyListFormatError, KeystoreError
from .abstract import AbstractKeyring
from .helper import ROLE_COUNT, decrypt_key
from .multiple import MultipleKeyring
from .private_key import PrivateKey
from .role_based import RoleBasedKeyring
from .single import SingleKeyring

logger = logging.getLogger(__name__)

_KLAYTN_WALLET_KEY_RE = re.compile(r"^(0x)?([0-9a-fA-F]{64})0x00(0x)?([0-9a-fA-F]{40})$")

KeyInput = Union[str, PrivateKey]


def is_klaytn_wallet_key(key: str) -> bool:
    """Check for the ``<private key>0x00<address>`` format."""
    return isinstance(key, str) and bool(_KLAYTN_WALLET_KEY_RE.match(key))


def _is_key(value: Any) -> bool:
    return isinstance(value, (str, PrivateKey))


class KeyringFactory:
    """
    Entry points for building keyrings.

    Example:
        ```python
        keyring = KeyringFactory.generate()
        multi = KeyringFactory.create_with_multiple_key(keyring.address, KeyringFactory.generate_multiple_keys(3))
        keystore = multi.encrypt("password")
        restored = KeyringFactory.decrypt(keystore, "password")
        ```
    """

    @staticmethod
    def generate(entropy: Optional[Union[str, bytes]] = None) -> SingleKeyring:
        """Generate a SingleKeyring whose address derives from a new random key."""
        key = PrivateKey.generate(entropy)
        return SingleKeyring(key.get_derived_address(), key)

    @staticmethod
    def generate_single_key(entropy: Optional[Union[str, bytes]] = None) -> str:
        """Generate one private key string."""
        return PrivateKey.generate(entropy).private_key

    @staticmethod
    def generate_multiple_keys(num: int, entropy: Optional[Union[str, bytes]] = None) -> List[str]:
        """Generate ``num`` private key strings."""
        if isinstance(num, bool) or not isinstance(num, int) or num < 1:
            raise InvalidKeyListFormatError(f"num should be a positive integer, got {num!r}")
        return [PrivateKey.generate(entropy).private_key for _ in range(num)]

    @staticmethod
    def generate_role_based_keys(num_array: Sequence[int],
                                 entropy: Optional[Union[str, bytes]] = None) -> List[List[str]]:
        """Generate private key strings per role, ``num_array[role]`` keys for each."""
        if not isinstance(num_array, (list, tuple)):
            raise InvalidKeyListFormatError("To generate keys by role, num_array should be an array.")
        if len(num_array) > ROLE_COUNT:
            raise InvalidKeyListFormatError(
                f"Unsupported role. The length of num_array should be less than or equal to {ROLE_COUNT}."
            )
        result = []
        for num in num_array:
            if isinstance(num, bool) or not isinstance(num, int) or num < 0:
                raise InvalidKeyListFormatError(f"Number of keys per role should be a non-negative integer, got {num!r}")
            result.append([PrivateKey.generate(entropy).private_key for _ in range(num)])
        return result

    @staticmethod
    def create(address: str, key: Union[KeyInput, Sequence[KeyInput], Sequence[Sequence[KeyInput]]]
               ) -> AbstractKeyring:
        """
        Create the keyring variant matching the key shape.

        A key → SingleKeyring; a list of keys → MultipleKeyring;
        a list of key lists → RoleBasedKeyring.
        """
        if _is_key(key):
            return KeyringFactory.create_with_single_key(address, key)
        if isinstance(key, (list, tuple)):
            if all(_is_key(k) for k in key):
                return KeyringFactory.create_with_multiple_key(address, key)
            if all(isinstance(k, (list, tuple)) for k in key):
                return KeyringFactory.create_with_role_based_key(address, key)
        raise InvalidKeyListFormatError(f"Unsupported key type: {type(key).__name__}")

    @staticmethod
    def create_from_private_key(private_key: KeyInput) -> SingleKeyring:
        """
        Create a SingleKeyring whose address derives from the key.

        A Klaytn wallet key string keeps the address it carries.
        """
        if isinstance(private_key, str) and is_klaytn_wallet_key(private_key):
            return KeyringFactory.create_from_klaytn_wallet_key(private_key)
        key = private_key if isinstance(private_key, PrivateKey) else PrivateKey(private_key)
        return SingleKeyring(key.get_derived_address(), key)

    @staticmethod
    def create_from_klaytn_wallet_key(klaytn_wallet_key: str) -> SingleKeyring:
        """Create a SingleKeyring from ``<private key>0x00<address>``."""
        match = _KLAYTN_WALLET_KEY_RE.match(klaytn_wallet_key) if isinstance(klaytn_wallet_key, str) else None
        if match is None:
            raise InvalidKeyFormatError("Invalid Klaytn wallet key")
        return SingleKeyring(add_hex_prefix(match.group(4)), add_hex_prefix(match.group(2)))

    @staticmethod
    def create_with_single_key(address: str, key: KeyInput) -> SingleKeyring:
        if isinstance(key, (list, tuple)):
            raise InvalidKeyFormatError(
                "Invalid format of parameter. Use 'create_with_multiple_key' or 'create_with_role_based_key' for a list of keys."
            )
        return SingleKeyring(address, key)

    @staticmethod
    def create_with_multiple_key(address: str, keys: Sequence[KeyInput]) -> MultipleKeyring:
        if isinstance(keys, (list, tuple)) and not all(_is_key(k) for k in keys):
            raise InvalidKeyListFormatError(
                "Invalid format of parameter. 'keys' should be a list of private key strings or PrivateKey instances."
            )
        return MultipleKeyring(address, keys)

    @staticmethod
    def create_with_role_based_key(address: str, role_based_keys: Sequence[Sequence[KeyInput]]
                                   ) -> RoleBasedKeyring:
        return RoleBasedKeyring(address, role_based_keys)

    @staticmethod
    def decrypt(keystore: Union[str, Dict[str, Any]], password: Union[str, bytes]) -> AbstractKeyring:
        """
        Decrypt a keystore v3 or v4 object into a keyring.

        One entry gives a SingleKeyring, several entries a MultipleKeyring,
        and per-role entry lists a RoleBasedKeyring. An empty v4 ``keyring``
        gives a MultipleKeyring with no keys.

        Raises:
            KeystoreDecryptionError: If the password is wrong
            KeystoreError: If the keystore is malformed
        """
        if isinstance(keystore, str):
            try:
                keystore = json.loads(keystore)
            except json.JSONDecodeError as e:
                raise KeystoreError(f"Invalid keystore JSON: {e}", cause=e) from e
        if not isinstance(keystore, dict):
            raise KeystoreError(f"Keystore must be an object, got {type(keystore).__name__}")

        version = keystore.get("version")
        if version == 3:
            crypto = keystore.get("crypto") or keystore.get("Crypto")
            if not isinstance(crypto, dict):
                raise KeystoreError("Keystore v3 must have a 'crypto' object")
            entries: List[Any] = [crypto]
        elif version == 4:
            entries = keystore.get("keyring")
            if not isinstance(entries, list):
                raise KeystoreError("Keystore v4 must have a 'keyring' list")
        else:
            raise KeystoreError(f"Unsupported keystore version: {version!r}")

        address = keystore.get("address")

        if not entries:
            logger.debug(f"Decrypted empty keystore for {address}")
            return MultipleKeyring(_require_address(address), [])

        if all(isinstance(entry, list) for entry in entries):
            if len(entries) > ROLE_COUNT:
                raise KeystoreError(f"Keystore holds {len(entries)} roles, at most {ROLE_COUNT} are supported")
            keys = [[decrypt_key(entry, password) for entry in role_entries] for role_entries in entries]
            logger.debug(f"Decrypted role-based keystore for {address}")
            return RoleBasedKeyring(_require_address(address), keys)

        if not all(isinstance(entry, dict) for entry in entries):
            raise KeystoreError("Keystore 'keyring' must hold either entries or per-role entry lists")

        keys = [decrypt_key(entry, password) for entry in entries]
        logger.debug(f"Decrypted {len(keys)} key(s) from keystore v{version}")
        if len(keys) == 1:
            key = PrivateKey(keys[0])
            return SingleKeyring(address or key.get_derived_address(), key)
        return MultipleKeyring(_require_address(address), keys)


def _require_address(address: Optional[str]) -> str:
    if not address:
        raise KeystoreError("Keystore must have an 'address'")
    return address


__all__ = ["KeyringFactory", "is_klaytn_wallet_key"]
