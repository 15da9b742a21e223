"""
SingleKeyring: one address, one private key used for every role.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union

from ..account.account import Account
from ..crypto.hashes import hash_message
from ..runtime.errors import (
    IncompleteSigningParamsError,
    InvalidOptionsShapeError,
    RoleRequiredError,
)
from .abstract import AbstractKeyring
from .helper import (
    KeyRole,
    encrypt_key,
    format_encrypted,
    validate_for_signing,
    validate_index_with_keys,
    validate_role,
)
from .options import KeystoreOptions
from .private_key import PrivateKey
from .signature_data import SignatureData

logger = logging.getLogger(__name__)


class SingleKeyring(AbstractKeyring):
    """
    Keyring holding a single private key.
    """

    def __init__(self, address: str, key: Union[str, PrivateKey]):
        """
        Args:
            address: Address of the keyring
            key: Private key hex string or PrivateKey instance
        """
        super().__init__(address)
        self.key = key
        logger.debug(f"Created SingleKeyring {self.address}")

    @property
    def key(self) -> PrivateKey:
        return self._key

    @key.setter
    def key(self, key_input: Union[str, PrivateKey]) -> None:
        self._key = key_input if isinstance(key_input, PrivateKey) else PrivateKey(key_input)

    def get_public_key(self, compressed: bool = False) -> str:
        return self._key.get_public_key(compressed)

    def copy(self) -> SingleKeyring:
        return SingleKeyring(self.address, self._key)

    def sign_with_key(self, transaction_hash: str, chain_id: Union[str, int], role: int,
                      index: int = 0) -> SignatureData:
        validate_for_signing(transaction_hash, chain_id)
        if role is None:
            raise RoleRequiredError("role should be defined to sign.")

        keys = self.get_key_by_role(role)
        validate_index_with_keys(index, len(keys))
        return keys[index].sign(transaction_hash, chain_id)

    def sign_with_keys(self, transaction_hash: str, chain_id: Union[str, int],
                       role: int) -> List[SignatureData]:
        validate_for_signing(transaction_hash, chain_id)
        if role is None:
            raise RoleRequiredError("role should be defined to sign.")

        return [key.sign(transaction_hash, chain_id) for key in self.get_key_by_role(role)]

    def sign_message(self, message: str, role: Optional[int] = None,
                     index: Optional[int] = None) -> Dict[str, Any]:
        message_hash = hash_message(message)
        if role is None and index is None:
            role, index = KeyRole.TRANSACTION_KEY, 0
        elif role is None or index is None:
            raise IncompleteSigningParamsError(
                "To sign the given message, both role and index must be defined. "
                "If both role and index are not defined, this function signs the message using "
                f"the default key({KeyRole.TRANSACTION_KEY.role_name}[0])."
            )

        keys = self.get_key_by_role(role)
        validate_index_with_keys(index, len(keys))

        return {
            "message_hash": message_hash,
            "signature": keys[index].sign_message(message_hash),
            "message": message,
        }

    def get_key_by_role(self, role: int) -> List[PrivateKey]:
        validate_role(role)
        return [self._key]

    def to_account(self, options: Any = None) -> Account:
        """Build an account with an AccountKeyPublic."""
        if options is not None:
            raise InvalidOptionsShapeError("SingleKeyring cannot have weighted multisig options.")
        return Account.create_with_account_key_public(self.address, self.get_public_key())

    def get_klaytn_wallet_key(self) -> str:
        """Export as ``<private key>0x00<address>``."""
        return f"{self._key.private_key}0x00{self.address}"

    def is_decoupled(self) -> bool:
        return self.address != self._key.get_derived_address()

    def encrypt(self, password: Union[str, bytes],
                options: Union[KeystoreOptions, Dict[str, Any], None] = None) -> Dict[str, Any]:
        """Encrypt into a keystore v4 object with one entry."""
        options = KeystoreOptions.parse(options)
        key_ring = encrypt_key(self._key, password, options)
        return format_encrypted(4, self.address, key_ring, options)

    def encrypt_v3(self, password: Union[str, bytes],
                   options: Union[KeystoreOptions, Dict[str, Any], None] = None) -> Dict[str, Any]:
        """Encrypt into a keystore v3 object (``crypto`` holds the single entry)."""
        options = KeystoreOptions.parse(options)
        key_ring = encrypt_key(self._key, password, options)
        return format_encrypted(3, self.address, key_ring[0], options)


__all__ = ["SingleKeyring"]
