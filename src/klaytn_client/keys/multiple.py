"""
MultipleKeyring: one address, several private keys shared by every role.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ..account.account import Account
from ..account.options import OptionsInput, fill_weighted_multi_sig_options_for_multi_sig
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


class MultipleKeyring(AbstractKeyring):
    """
    Keyring holding an ordered list of private keys.

    The same list is used for every role: get_key_by_role returns all keys
    whichever valid role is requested.
    """

    def __init__(self, address: str, keys: Optional[Sequence[Union[str, PrivateKey]]]):
        """
        Args:
            address: Address of the keyring
            keys: Private key hex strings and/or PrivateKey instances
        """
        super().__init__(address)
        self.keys = keys
        logger.debug(f"Created MultipleKeyring {self.address} with {len(self._keys or [])} key(s)")

    @property
    def keys(self) -> Optional[List[PrivateKey]]:
        """Held keys; None when the keys have been explicitly unset."""
        return self._keys

    @keys.setter
    def keys(self, key_input: Optional[Sequence[Union[str, PrivateKey]]]) -> None:
        if key_input is None:
            self._keys = None
            return
        self._keys = formatting_for_key_in_keyring(key_input)

    def _held_keys(self) -> List[PrivateKey]:
        return self._keys if self._keys is not None else []

    def get_public_key(self) -> List[str]:
        """Public key strings, in key order."""
        return [key.get_public_key() for key in self._held_keys()]

    def copy(self) -> MultipleKeyring:
        """New keyring with its own key list holding the same PrivateKey instances."""
        return MultipleKeyring(self.address, self.keys)

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
        """
        Sign a message.

        With neither role nor index, signs with the first transaction key.
        Supplying only one of them is rejected.

        Returns:
            ``{"message_hash": ..., "signature": ..., "message": ...}``
        """
        message_hash = hash_message(message)
        if role is None and index is None:
            role = KeyRole.TRANSACTION_KEY
            if not self._held_keys():
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

        signature = keys[index].sign_message(message_hash)
        return {
            "message_hash": message_hash,
            "signature": signature,
            "message": message,
        }

    def get_key_by_role(self, role: int) -> List[PrivateKey]:
        validate_role(role)
        return self._held_keys()

    def to_account(self, options: OptionsInput = None) -> Account:
        """
        Build an account with an AccountKeyWeightedMultiSig.

        Args:
            options: Threshold and weights; threshold 1 and weight 1 per key by default
        """
        if isinstance(options, (list, tuple)):
            raise InvalidOptionsShapeError(
                "For AccountKeyWeightedMultiSig, options cannot be defined as an array of WeightedMultiSigOptions."
            )

        options = fill_weighted_multi_sig_options_for_multi_sig(len(self._held_keys()), options)
        return Account.create_with_account_key_weighted_multi_sig(self.address, self.get_public_key(), options)

    def encrypt(self, password: Union[str, bytes],
                options: Union[KeystoreOptions, Dict[str, Any], None] = None) -> Dict[str, Any]:
        """
        Encrypt into a keystore v4 object.

        Args:
            password: Keystore password
            options: salt, iv, kdf, dklen, c, n, r, p, cipher, uuid

        Returns:
            ``{"version": 4, "id": ..., "address": ..., "keyring": [entry, ...]}``

        Note:
            KeyringFactory.decrypt rebuilds a keystore holding exactly one entry
            as a SingleKeyring, so a one-key MultipleKeyring comes back with
            get_public_key() returning a str rather than a one-element list.
        """
        options = KeystoreOptions.parse(options)
        key_ring = encrypt_key(self._held_keys(), password, options)
        return format_encrypted(4, self.address, key_ring, options)


def formatting_for_key_in_keyring(key_input: Sequence[Union[str, PrivateKey]]) -> List[PrivateKey]:
    """
    Normalize the key input of a MultipleKeyring.

    PrivateKey elements are kept as-is, strings become new PrivateKeys.

    Raises:
        InvalidKeyListFormatError: If key_input is not a list
        InvalidKeyFormatError: If a string element is not a valid private key
    """
    if not isinstance(key_input, (list, tuple)):
        raise InvalidKeyListFormatError(
            "Invalid parameter. The private keys to add should be defined as an array."
        )
    return [key if isinstance(key, PrivateKey) else PrivateKey(key) for key in key_input]


__all__ = ["MultipleKeyring", "formatting_for_key_in_keyring"]
