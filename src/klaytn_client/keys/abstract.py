"""
Base keyring interface.

Defines the contract every keyring variant implements: an address plus
role-scoped access to private keys for signing, account derivation and
keystore encryption.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from ..runtime.codec import add_hex_prefix, is_valid_address
from ..runtime.errors import InvalidAddressError, UnsupportedOperationError
from .private_key import PrivateKey
from .signature_data import SignatureData


class AbstractKeyring(ABC):
    """
    Base keyring.

    Holds the address; subclasses hold the keys.
    """

    def __init__(self, address: str):
        self.address = address

    @property
    def address(self) -> str:
        """0x-prefixed lower-case account address."""
        return self._address

    @address.setter
    def address(self, address_input: str) -> None:
        if not is_valid_address(address_input):
            raise InvalidAddressError(f"Invalid address: {address_input!r}")
        self._address = add_hex_prefix(address_input).lower()

    @abstractmethod
    def get_public_key(self) -> Any:
        """
        Get public key strings.

        Returns:
            A string, a list of strings, or a list per role depending on variant
        """
        pass

    @abstractmethod
    def copy(self) -> AbstractKeyring:
        """Return a new keyring with the same address and keys."""
        pass

    @abstractmethod
    def sign_with_key(self, transaction_hash: str, chain_id: Union[str, int], role: int,
                      index: int = 0) -> SignatureData:
        """
        Sign a transaction hash with one key of a role.

        Args:
            transaction_hash: 0x-prefixed 32-byte hash
            chain_id: Network chain id
            role: KeyRole value
            index: Index of the key within the role

        Returns:
            Signature
        """
        pass

    @abstractmethod
    def sign_with_keys(self, transaction_hash: str, chain_id: Union[str, int],
                       role: int) -> List[SignatureData]:
        """Sign a transaction hash with every key of a role, in key order."""
        pass

    @abstractmethod
    def sign_message(self, message: str, role: Optional[int] = None,
                     index: Optional[int] = None) -> Dict[str, Any]:
        """
        Sign a message with the Klaytn signed-message prefix.

        Returns:
            Dictionary with ``message_hash``, ``signature`` and ``message``
        """
        pass

    @abstractmethod
    def get_key_by_role(self, role: int) -> List[PrivateKey]:
        """Get the keys used for a role."""
        pass

    @abstractmethod
    def to_account(self, options: Any = None) -> Any:
        """Build the Account describing this keyring's keys."""
        pass

    @abstractmethod
    def encrypt(self, password: Union[str, bytes], options: Any = None) -> Dict[str, Any]:
        """Encrypt the keyring into a keystore v4 object."""
        pass

    def sign(self, transaction_hash: str, chain_id: Union[str, int], role: int,
             index: Optional[int] = None) -> Union[SignatureData, List[SignatureData]]:
        """
        Sign with one key when an index is given, otherwise with all keys of the role.
        """
        if index is not None:
            return self.sign_with_key(transaction_hash, chain_id, role, index)
        return self.sign_with_keys(transaction_hash, chain_id, role)

    def encrypt_v3(self, password: Union[str, bytes], options: Any = None) -> Dict[str, Any]:
        """Keystore v3 holds exactly one key; only SingleKeyring supports it."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot be encrypted to keystore v3. Use encrypt() for keystore v4."
        )

    def get_klaytn_wallet_key(self) -> str:
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot be exported as a Klaytn wallet key format."
        )

    def is_decoupled(self) -> bool:
        """Whether the address is not derived from the keyring's key."""
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address='{self.address}')"


__all__ = ["AbstractKeyring"]
