"""
RoleBasedKeyring: one address, an independent key list for each role.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ..account.account import Account
from ..account.options import OptionsInput
from ..crypto.hashes import hash_message
from ..runtime.errors import (
    IncompleteSigningParamsError,
    InvalidKeyListFormatError,
    InvalidOptionsShapeError,
    NoDefaultKeyError,
    RoleRequiredError,
)
from .abstract import AbstractKeyring
from .helper import (
    ROLE_COUNT,
    KeyRole,
    encrypt_key,
    format_encrypted,
    validate_for_signing,
    validate_index_with_keys,
    validate_role,
)
from .multiple import formatting_for_key_in_keyring
from .options import KeystoreOptions
from .private_key import PrivateKey
from .signature_data import SignatureData

logger = logging.getLogger(__name__)

RoleKeysInput = Sequence[Sequence[Union[str, PrivateKey]]]


class RoleBasedKeyring(AbstractKeyring):
    """
    Keyring holding keys per role: transaction, account update and fee payer.

    An empty account-update or fee-payer list falls back to the transaction
    keys when keys are requested for that role.
    """

    def __init__(self, address: str, keys: RoleKeysInput):
        """
        Args:
            address: Address of the keyring
            keys: Up to three key lists, indexed by KeyRole; missing roles are empty
        """
        super().__init__(address)
        self.keys = keys
        logger.debug(
            f"Created RoleBasedKeyring {self.address} with key counts {[len(k) for k in self._keys]}"
        )

    @property
    def keys(self) -> List[List[PrivateKey]]:
        return self._keys

    @keys.setter
    def keys(self, key_input: RoleKeysInput) -> None:
        self._keys = formatting_for_keys_by_role(key_input)

    @property
    def role_transaction_key(self) -> List[PrivateKey]:
        return self.get_key_by_role(KeyRole.TRANSACTION_KEY)

    @property
    def role_account_update_key(self) -> List[PrivateKey]:
        return self.get_key_by_role(KeyRole.ACCOUNT_UPDATE_KEY)

    @property
    def role_fee_payer_key(self) -> List[PrivateKey]:
        return self.get_key_by_role(KeyRole.FEE_PAYER_KEY)

    def get_public_key(self) -> List[List[str]]:
        """Public key strings grouped by role."""
        return [[key.get_public_key() for key in role_keys] for role_keys in self._keys]

    def copy(self) -> RoleBasedKeyring:
        return RoleBasedKeyring(self.address, self._keys)

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
            role = KeyRole.TRANSACTION_KEY
            if not self._keys[KeyRole.TRANSACTION_KEY]:
                raise NoDefaultKeyError(
                    f"Default key({KeyRole.TRANSACTION_KEY.role_name}) does not have enough keys to sign."
                )
            index = 0
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
        """
        Keys of a role, or the transaction keys when that role is empty.

        Raises:
            NoDefaultKeyError: If the role and the transaction role are both empty
        """
        role = validate_role(role)
        keys = self._keys[role]
        if not keys and role > KeyRole.TRANSACTION_KEY:
            if not self._keys[KeyRole.TRANSACTION_KEY]:
                raise NoDefaultKeyError(
                    f"The key with {role.role_name} role does not exist. "
                    f"The {KeyRole.TRANSACTION_KEY.role_name} for the default role is also empty."
                )
            keys = self._keys[KeyRole.TRANSACTION_KEY]
        return keys

    def to_account(self, options: Optional[Sequence[OptionsInput]] = None) -> Account:
        """
        Build an account with an AccountKeyRoleBased.

        Args:
            options: One WeightedMultiSigOptions (or dict) per role
        """
        if options is not None and not isinstance(options, (list, tuple)):
            raise InvalidOptionsShapeError(
                "options for an account should define threshold and weight for each roles in an array format"
            )
        return Account.create_with_account_key_role_based(self.address, self.get_public_key(), options)

    def encrypt(self, password: Union[str, bytes],
                options: Union[KeystoreOptions, Dict[str, Any], None] = None) -> Dict[str, Any]:
        """
        Encrypt into a keystore v4 object.

        Returns:
            ``keyring`` holds three entry lists, one per role
        """
        options = KeystoreOptions.parse(options)
        key_ring = [encrypt_key(role_keys, password, options) for role_keys in self._keys]
        return format_encrypted(4, self.address, key_ring, options)


def formatting_for_keys_by_role(key_input: RoleKeysInput) -> List[List[PrivateKey]]:
    """
    Normalize the key input of a RoleBasedKeyring into exactly three lists.

    Raises:
        InvalidKeyListFormatError: If the input or any role entry is not a list,
            or more than three roles are given
    """
    if not isinstance(key_input, (list, tuple)):
        raise InvalidKeyListFormatError("Invalid parameter. The keys by role should be defined as an array.")
    if len(key_input) > ROLE_COUNT:
        raise InvalidKeyListFormatError(
            f"Unsupported role number. The length of keys by role should not exceed {ROLE_COUNT}."
        )

    keys = [formatting_for_key_in_keyring(role_keys) for role_keys in key_input]
    keys += [[] for _ in range(ROLE_COUNT - len(keys))]
    return keys


__all__ = ["RoleBasedKeyring", "formatting_for_keys_by_role"]
